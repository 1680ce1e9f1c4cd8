import enum
from typing import Any, Dict, Iterable, List, Sequence


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"


class TaskTrackerError(Exception):
    """Base class for failures the error handler knows how to report."""
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskTrackerError):
    """A candidate task violates the field rules; one message per field."""
    kind = ErrorKind.VALIDATION

    def __init__(self, fields: Sequence[str], messages: Sequence[str]):
        super().__init__("; ".join(messages))
        self.fields = list(fields)
        self.messages = list(messages)

    @classmethod
    def from_errors(cls, errors: Iterable[Dict[str, Any]]) -> "TaskValidationError":
        """Build from pydantic-style error dicts (``loc``, ``type``, ``msg``, ``input``)."""
        fields: List[str] = []
        messages: List[str] = []
        for err in errors:
            if err.get("type") == "json_invalid":
                loc = []
            else:
                loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            field = ".".join(loc) or "body"
            if field in fields:
                continue
            fields.append(field)
            if err.get("type") in ("missing", "string_too_short") or err.get("input") is None:
                messages.append(f"{field} is required")
            else:
                messages.append(f"{field}: {err.get('msg', 'invalid value')}")
        return cls(fields, messages)


class InvalidIdFormat(TaskTrackerError):
    kind = ErrorKind.INVALID_ID

    def __init__(self, task_id: str):
        super().__init__("Invalid ID format")
        self.task_id = task_id


class TaskNotFound(TaskTrackerError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, task_id: str):
        super().__init__("Task not found")
        self.task_id = task_id
