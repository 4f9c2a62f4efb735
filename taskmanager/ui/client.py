"""HTTP client for the task API."""
from __future__ import annotations

from typing import Any, Optional

import httpx

from taskmanager.backend.schemas.task import TaskRead


class TaskApiError(Exception):
    """Any non-success response or transport failure.

    ``status_code`` is None when the request never got a response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskApiClient:
    def __init__(self, http: httpx.Client, prefix: str = "/api"):
        self._http = http
        self._prefix = prefix.rstrip("/")

    @classmethod
    def connect(cls, base_url: str, prefix: str = "/api", timeout: float = 10.0) -> "TaskApiClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout), prefix=prefix)

    def close(self) -> None:
        self._http.close()

    def _send(self, method: str, path: str, failure: str, json: Any = None) -> httpx.Response:
        try:
            r = self._http.request(method, f"{self._prefix}{path}", json=json)
        except httpx.HTTPError as exc:
            raise TaskApiError(f"{failure}: {exc}") from exc
        if r.is_error:
            try:
                body = r.json()
            except ValueError:
                body = None
            detail = body.get("error") if isinstance(body, dict) else None
            raise TaskApiError(detail or failure, status_code=r.status_code)
        return r

    def list_tasks(self) -> list[TaskRead]:
        r = self._send("GET", "/tasks", "Failed to fetch tasks")
        return [TaskRead.model_validate(item) for item in r.json()]

    def get_task(self, task_id: int) -> TaskRead:
        r = self._send("GET", f"/tasks/{task_id}", "Failed to fetch task")
        return TaskRead.model_validate(r.json())

    def create_task(self, title: str) -> TaskRead:
        r = self._send("POST", "/tasks", "Failed to add task", json={"title": title})
        return TaskRead.model_validate(r.json())

    def update_task(
        self,
        task_id: int,
        *,
        title: Optional[str] = None,
        is_completed: Optional[bool] = None,
    ) -> TaskRead:
        body: dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if is_completed is not None:
            body["isCompleted"] = is_completed
        r = self._send("PUT", f"/tasks/{task_id}", "Failed to update task", json=body)
        return TaskRead.model_validate(r.json())

    def delete_task(self, task_id: int) -> None:
        self._send("DELETE", f"/tasks/{task_id}", "Failed to delete task")
