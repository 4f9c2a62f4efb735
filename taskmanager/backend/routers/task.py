# taskmanager/backend/routers/task.py
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from taskmanager.backend.db.session import get_session
from taskmanager.backend.schemas.task import TaskCreate, TaskRead, TaskUpdate
from taskmanager.backend.services import task_store

router = APIRouter(prefix="/tasks", tags=["Tasks"])

# Store errors (TaskValidationError / TaskNotFound / StorageFault) are mapped to
# 400 / 404 / 500 by the handlers in core.errors.


@router.get("", response_model=list[TaskRead])
def list_tasks(db: Session = Depends(get_session)):
    return task_store.list_tasks(db)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: int, db: Session = Depends(get_session)):
    return task_store.get_task(db, task_id)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreate, db: Session = Depends(get_session)):
    return task_store.create_task(db, payload.title)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    payload: Optional[TaskUpdate] = None,
    db: Session = Depends(get_session),
):
    # a PUT without a body is an empty patch
    return task_store.update_task(db, task_id, payload or TaskUpdate())


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, db: Session = Depends(get_session)):
    task_store.delete_task(db, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
