"""Centralized SQLModel imports to ensure metadata is populated."""

from taskmanager.backend.models import task as _task  # noqa: F401
