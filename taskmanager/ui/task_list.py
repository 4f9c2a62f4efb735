"""Task list screen: fetch, render, and optimistic mutations.

Toggle and delete roll back locally when the API call fails. Edit does not keep
the old title, so a failed edit is superseded by a full reload. Creation waits
for the server-assigned id and createdDate before the task is shown.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from taskmanager.backend.schemas.task import TaskRead
from taskmanager.ui.client import TaskApiClient, TaskApiError
from taskmanager.ui.collection import TaskCollection

log = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Could not load tasks. Please try again later."


class ViewStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class TaskStats:
    completed: int
    total: int

    @property
    def progress(self) -> float:
        """Completion percentage, 0 for an empty list."""
        if self.total == 0:
            return 0.0
        return self.completed / self.total * 100


def _short_date(created_date: str) -> str:
    try:
        dt = datetime.fromisoformat(created_date.replace("Z", "+00:00"))
    except ValueError:
        return created_date
    return f"{dt:%b} {dt.day}"


class TaskListView:
    def __init__(self, api: TaskApiClient):
        self.api = api
        self.collection = TaskCollection()
        self.status = ViewStatus.LOADING
        self.error: Optional[str] = None

    @property
    def tasks(self) -> list[TaskRead]:
        return self.collection.tasks

    @property
    def stats(self) -> TaskStats:
        tasks = self.collection.tasks
        return TaskStats(
            completed=sum(1 for t in tasks if t.is_completed),
            total=len(tasks),
        )

    # ---- loading ----

    def load(self) -> None:
        try:
            tasks = self.api.list_tasks()
        except TaskApiError as exc:
            log.warning("Task fetch failed: %s", exc.message)
            self.status = ViewStatus.ERROR
            self.error = LOAD_ERROR_MESSAGE
            return
        self.collection.replace_all(tasks)
        self.status = ViewStatus.READY
        self.error = None

    def retry(self) -> None:
        self.status = ViewStatus.LOADING
        self.load()

    # ---- mutations ----

    def add_task(self, title: str) -> Optional[TaskRead]:
        if not title.strip():
            return None
        try:
            created = self.api.create_task(title)
        except TaskApiError as exc:
            log.warning("Failed to add task: %s", exc.message)
            return None
        self.collection.prepend(created)
        return created

    def toggle_task(self, task_id: int, is_completed: bool) -> None:
        change = self.collection.set_completed(task_id, is_completed)
        if change is None:
            return
        try:
            self.api.update_task(task_id, is_completed=is_completed)
        except TaskApiError as exc:
            log.warning("Failed to update task %s: %s", task_id, exc.message)
            self.collection.revert(change)
            return
        self.collection.commit(change)

    def edit_task(self, task_id: int, title: str) -> None:
        title = title.strip()
        if not title:
            return
        change = self.collection.set_title(task_id, title)
        if change is None:
            return
        try:
            self.api.update_task(task_id, title=title)
        except TaskApiError as exc:
            log.warning("Failed to update task %s: %s", task_id, exc.message)
            # superseded by the reload below, whether or not it succeeds
            self.collection.commit(change)
            self.load()
            return
        self.collection.commit(change)

    def delete_task(self, task_id: int) -> None:
        change = self.collection.remove(task_id)
        if change is None:
            return
        try:
            self.api.delete_task(task_id)
        except TaskApiError as exc:
            log.warning("Failed to delete task %s: %s", task_id, exc.message)
            self.collection.revert(change)
            return
        self.collection.commit(change)

    # ---- rendering ----

    def render(self) -> str:
        if self.status is ViewStatus.LOADING:
            return "Loading your tasks..."
        if self.status is ViewStatus.ERROR:
            return f"{self.error}\n[Try Again]"

        stats = self.stats
        lines = [
            "TaskManager",
            f"Progress: {stats.completed}/{stats.total} Done ({stats.progress:.0f}%)",
            "",
        ]
        if stats.total == 0:
            lines.append("All caught up!")
            lines.append("You have no pending tasks. Enjoy your day!")
        for t in self.collection:
            mark = "x" if t.is_completed else " "
            lines.append(f"[{mark}] {t.title}  ({_short_date(t.created_date)})")
        return "\n".join(lines)
