from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ..database import get_db
from ..repository import TaskRepository
from ..schemas.task import DeleteResponse, Task as TaskSchema, TaskCreate, TaskUpdate

router = APIRouter()


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def _ensure_exists(repo: TaskRepository, task_id: str) -> None:
    # Checked here as well as inside the repository: the handler owns the 404.
    if repo.find_by_id(task_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


@router.get("", response_model=List[TaskSchema])
def get_tasks(repo: TaskRepository = Depends(get_task_repository)):
    """Get all tasks, newest first."""
    return repo.list_all()


@router.post("", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Create a new task."""
    return repo.create(task)


@router.get("/{task_id}", response_model=TaskSchema)
def get_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Get a specific task by ID."""
    _ensure_exists(repo, task_id)
    return repo.get_by_id(task_id)


@router.put("/{task_id}", response_model=TaskSchema)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Update a specific task."""
    _ensure_exists(repo, task_id)
    return repo.update(task_id, task_update)


@router.delete("/{task_id}", response_model=DeleteResponse)
def delete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Delete a specific task."""
    _ensure_exists(repo, task_id)
    return repo.delete_by_id(task_id)
