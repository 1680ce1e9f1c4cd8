import logging
from typing import Any, Dict, List, Mapping, Optional, Union
from uuid import UUID

from pydantic import ValidationError
from sqlmodel import Session, select

from .errors import InvalidIdFormat, TaskNotFound, TaskValidationError
from .models import Task
from .schemas.task import UPDATABLE_FIELDS, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = {"message": "Task deleted successfully"}


def _parse_id(task_id: str) -> str:
    try:
        return str(UUID(str(task_id)))
    except ValueError:
        raise InvalidIdFormat(task_id) from None


def _validate(candidate: Union[TaskCreate, Mapping[str, Any]]) -> TaskCreate:
    if isinstance(candidate, TaskCreate):
        return candidate
    try:
        return TaskCreate.model_validate(candidate)
    except ValidationError as exc:
        raise TaskValidationError.from_errors(exc.errors()) from None


class TaskRepository:
    """Create/read/update/delete tasks over one session.

    The only code that queries or writes the ``tasks`` table.
    """

    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[Task]:
        """All tasks, most recently created first."""
        query = select(Task).order_by(Task.created_at.desc())
        return list(self.session.exec(query).all())

    def create(self, candidate: Union[TaskCreate, Mapping[str, Any]]) -> Task:
        data = _validate(candidate)
        task = Task(
            title=data.title,
            description=data.description,
            details=data.details,
        )
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info("Created task id=%s", task.id)
        return task

    def find_by_id(self, task_id: str) -> Optional[Task]:
        """Return the task or ``None``; malformed ids still raise."""
        return self.session.get(Task, _parse_id(task_id))

    def get_by_id(self, task_id: str) -> Task:
        task = self.find_by_id(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    def update(self, task_id: str, changes: Union[TaskUpdate, Mapping[str, Any]]) -> Task:
        """Apply a partial update restricted to the updatable fields.

        The merged record is validated exactly like a new task, so a change
        can never leave ``title`` or ``description`` empty.
        """
        task = self.get_by_id(task_id)

        if isinstance(changes, TaskUpdate):
            update_data = changes.model_dump(exclude_unset=True)
        else:
            update_data = dict(changes)
        update_data = {k: v for k, v in update_data.items() if k in UPDATABLE_FIELDS}

        merged: Dict[str, Any] = {field: getattr(task, field) for field in UPDATABLE_FIELDS}
        merged.update(update_data)
        data = _validate(merged)

        for field in update_data:
            setattr(task, field, getattr(data, field))

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info("Updated task id=%s fields=%s", task.id, sorted(update_data))
        return task

    def delete_by_id(self, task_id: str) -> Dict[str, str]:
        task = self.get_by_id(task_id)
        self.session.delete(task)
        self.session.commit()
        logger.info("Deleted task id=%s", task.id)
        return dict(DELETE_CONFIRMATION)
