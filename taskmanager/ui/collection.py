"""The UI's single owned copy of the task list.

Mutations go through explicit operations instead of ad hoc list copies. Each
optimistic change hands back a ``PendingChange`` that the caller later either
commits (server agreed) or reverts (server call failed). ``version`` bumps on
every change so a renderer can tell when it is looking at stale output.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from taskmanager.backend.schemas.task import TaskRead


@dataclass(frozen=True, eq=False)
class PendingChange:
    kind: str  # "toggle" | "edit" | "delete"
    task_id: int
    index: int
    previous: Optional[TaskRead] = None


class TaskCollection:
    def __init__(self, tasks: Iterable[TaskRead] = ()):
        self._tasks: list[TaskRead] = list(tasks)
        self._pending: list[PendingChange] = []
        self.version = 0

    def __iter__(self) -> Iterator[TaskRead]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def tasks(self) -> list[TaskRead]:
        return list(self._tasks)

    @property
    def pending(self) -> list[PendingChange]:
        return list(self._pending)

    def get(self, task_id: int) -> Optional[TaskRead]:
        idx = self._index(task_id)
        return None if idx is None else self._tasks[idx]

    def _index(self, task_id: int) -> Optional[int]:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _bump(self) -> None:
        self.version += 1

    # ---- server-confirmed state ----

    def replace_all(self, tasks: Iterable[TaskRead]) -> None:
        """Reconcile with server truth; outstanding optimistic changes are dropped."""
        self._tasks = list(tasks)
        self._pending.clear()
        self._bump()

    def prepend(self, task: TaskRead) -> None:
        self._tasks.insert(0, task)
        self._bump()

    # ---- optimistic changes ----

    def set_completed(self, task_id: int, is_completed: bool) -> Optional[PendingChange]:
        idx = self._index(task_id)
        if idx is None:
            return None
        previous = self._tasks[idx]
        self._tasks[idx] = previous.model_copy(update={"is_completed": is_completed})
        return self._track(PendingChange("toggle", task_id, idx, previous=previous))

    def set_title(self, task_id: int, title: str) -> Optional[PendingChange]:
        idx = self._index(task_id)
        if idx is None:
            return None
        self._tasks[idx] = self._tasks[idx].model_copy(update={"title": title})
        return self._track(PendingChange("edit", task_id, idx))

    def remove(self, task_id: int) -> Optional[PendingChange]:
        idx = self._index(task_id)
        if idx is None:
            return None
        removed = self._tasks.pop(idx)
        return self._track(PendingChange("delete", task_id, idx, previous=removed))

    def _track(self, change: PendingChange) -> PendingChange:
        self._pending.append(change)
        self._bump()
        return change

    def commit(self, change: PendingChange) -> None:
        # the optimistic state already matches the server
        if change in self._pending:
            self._pending.remove(change)

    def revert(self, change: PendingChange) -> None:
        if change not in self._pending:
            return  # superseded by replace_all
        self._pending.remove(change)

        if change.kind == "toggle" and change.previous is not None:
            # back to the value held before the toggle, not a flip of the current one
            idx = self._index(change.task_id)
            if idx is not None:
                self._tasks[idx] = self._tasks[idx].model_copy(
                    update={"is_completed": change.previous.is_completed}
                )
        elif change.kind == "delete" and change.previous is not None:
            if self._index(change.task_id) is None:
                self._tasks.insert(min(change.index, len(self._tasks)), change.previous)
        else:
            raise ValueError(f"cannot revert {change.kind!r} locally; reload instead")
        self._bump()
