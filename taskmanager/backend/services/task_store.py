"""Durable CRUD over the ``tasks`` table.

Every function takes an open session and returns ``TaskRead`` objects, so the
0/1 ``isCompleted`` column always leaves the store as a real bool.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from taskmanager.backend.core.errors import StorageFault, TaskNotFound, TaskValidationError
from taskmanager.backend.models.task import Task
from taskmanager.backend.schemas.task import TaskRead, TaskUpdate

log = logging.getLogger(__name__)


def _now_iso() -> str:
    # 2026-10-19T10:03:00.123Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _clean_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise TaskValidationError("Title is required")
    return title.strip()


def _to_read(row: Task) -> TaskRead:
    return TaskRead(
        id=row.id,
        title=row.title,
        is_completed=bool(row.is_completed),
        created_date=row.created_date,
    )


@contextmanager
def _storage(db: Session, message: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        log.exception("%s", message)
        raise StorageFault(message) from exc


def _get_row(db: Session, task_id: int) -> Task:
    row = db.get(Task, task_id)
    if row is None:
        raise TaskNotFound()
    return row


def list_tasks(db: Session) -> list[TaskRead]:
    stmt = select(Task).order_by(Task.created_date.desc(), Task.id.desc())
    with _storage(db, "Failed to fetch tasks"):
        rows = db.exec(stmt).all()
    return [_to_read(r) for r in rows]


def get_task(db: Session, task_id: int) -> TaskRead:
    with _storage(db, "Failed to fetch task"):
        row = _get_row(db, task_id)
    return _to_read(row)


def create_task(db: Session, title: Any) -> TaskRead:
    cleaned = _clean_title(title)
    row = Task(title=cleaned, is_completed=0, created_date=_now_iso())
    with _storage(db, "Failed to create task"):
        db.add(row)
        db.commit()
        db.refresh(row)
    log.info("Created task %s", row.id)
    return _to_read(row)


def update_task(db: Session, task_id: int, patch: TaskUpdate) -> TaskRead:
    changes = patch.changes()
    with _storage(db, "Failed to update task"):
        row = _get_row(db, task_id)

        values: dict[str, Any] = {}
        if "title" in changes:
            values["title"] = _clean_title(changes["title"])
        if "is_completed" in changes:
            flag = changes["is_completed"]
            if not isinstance(flag, bool):
                raise TaskValidationError("isCompleted must be a boolean")
            values["is_completed"] = 1 if flag else 0

        if not values:
            return _to_read(row)

        for name, value in values.items():
            setattr(row, name, value)
        db.add(row)
        db.commit()
        db.refresh(row)

    log.info("Updated task %s (%s)", task_id, ", ".join(sorted(values)))
    return _to_read(row)


def delete_task(db: Session, task_id: int) -> None:
    with _storage(db, "Failed to delete task"):
        row = _get_row(db, task_id)
        db.delete(row)
        db.commit()
    log.info("Deleted task %s", task_id)
