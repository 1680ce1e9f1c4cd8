from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True)]

# Fields a client may change after creation.
UPDATABLE_FIELDS = ("title", "description", "details")


class TaskBase(BaseModel):
    """Base task schema with common fields."""
    title: RequiredText
    description: RequiredText
    details: Optional[OptionalText] = None


class TaskCreate(TaskBase):
    """Schema for creating new tasks."""
    model_config = ConfigDict(extra="ignore")


class TaskUpdate(BaseModel):
    """Schema for updating existing tasks.

    Every field is optional; only fields present in the request are applied.
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[RequiredText] = None
    description: Optional[RequiredText] = None
    details: Optional[OptionalText] = None


class Task(TaskBase):
    """Complete task schema with all fields."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive values; they were written as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class DeleteResponse(BaseModel):
    message: str
