import re

import pytest
from sqlmodel import Session, text

from taskmanager.backend.core.errors import StorageFault, TaskNotFound, TaskValidationError
from taskmanager.backend.schemas.task import TaskUpdate
from taskmanager.backend.services import task_store

ISO_MS_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_create_then_get_returns_trimmed_incomplete_task(db):
    created = task_store.create_task(db, "  Buy milk  ")

    fetched = task_store.get_task(db, created.id)

    assert fetched.title == "Buy milk"
    assert fetched.is_completed is False
    assert ISO_MS_UTC.match(fetched.created_date)
    assert fetched == created


@pytest.mark.parametrize("title", ["", "   ", 123, None, ["a"]])
def test_create_rejects_invalid_title_and_persists_nothing(db, title):
    with pytest.raises(TaskValidationError, match="Title is required"):
        task_store.create_task(db, title)

    assert task_store.list_tasks(db) == []


def test_list_returns_newest_first(db):
    a = task_store.create_task(db, "A")
    b = task_store.create_task(db, "B")
    c = task_store.create_task(db, "C")

    assert [t.id for t in task_store.list_tasks(db)] == [c.id, b.id, a.id]


def test_completion_flag_is_stored_as_integer_and_read_as_bool(db):
    created = task_store.create_task(db, "Walk dog")
    task_store.update_task(db, created.id, TaskUpdate.model_validate({"isCompleted": True}))

    raw = db.exec(text('SELECT "isCompleted" FROM tasks WHERE id = :id').bindparams(id=created.id)).one()

    assert raw[0] == 1
    assert task_store.get_task(db, created.id).is_completed is True


def test_update_completion_keeps_title(db):
    created = task_store.create_task(db, "Write report")

    updated = task_store.update_task(db, created.id, TaskUpdate.model_validate({"isCompleted": True}))

    assert updated.is_completed is True
    assert updated.title == "Write report"
    assert updated.created_date == created.created_date


def test_update_applies_false_explicitly(db):
    created = task_store.create_task(db, "Write report")
    task_store.update_task(db, created.id, TaskUpdate.model_validate({"isCompleted": True}))

    updated = task_store.update_task(db, created.id, TaskUpdate.model_validate({"isCompleted": False}))

    assert updated.is_completed is False


def test_update_both_fields(db):
    created = task_store.create_task(db, "Old")

    updated = task_store.update_task(db, created.id, TaskUpdate.model_validate({"title": " New ", "isCompleted": True}))

    assert updated.title == "New"
    assert updated.is_completed is True


def test_empty_update_is_noop(db):
    created = task_store.create_task(db, "Same")

    assert task_store.update_task(db, created.id, TaskUpdate()) == created


@pytest.mark.parametrize("patch", [{"title": "   "}, {"title": None}, {"isCompleted": None}])
def test_update_rejects_invalid_fields_without_change(db, patch):
    created = task_store.create_task(db, "Keep me")

    with pytest.raises(TaskValidationError):
        task_store.update_task(db, created.id, TaskUpdate.model_validate(patch))

    assert task_store.get_task(db, created.id) == created


def test_update_missing_task(db):
    with pytest.raises(TaskNotFound):
        task_store.update_task(db, 999, TaskUpdate(title="x"))


def test_delete_then_get_is_not_found(db):
    created = task_store.create_task(db, "Temporary")

    task_store.delete_task(db, created.id)

    with pytest.raises(TaskNotFound):
        task_store.get_task(db, created.id)
    with pytest.raises(TaskNotFound):
        task_store.delete_task(db, created.id)


def test_delete_removes_exactly_one(db):
    keep = task_store.create_task(db, "Keep")
    drop = task_store.create_task(db, "Drop")

    task_store.delete_task(db, drop.id)

    assert task_store.list_tasks(db) == [keep]


def test_ids_are_not_reused_after_delete(db):
    first = task_store.create_task(db, "First")
    task_store.delete_task(db, first.id)

    second = task_store.create_task(db, "Second")

    assert second.id > first.id


def test_engine_fault_surfaces_as_storage_fault(bare_engine):
    with Session(bare_engine) as s:
        with pytest.raises(StorageFault, match="Failed to fetch tasks"):
            task_store.list_tasks(s)
        with pytest.raises(StorageFault, match="Failed to create task"):
            task_store.create_task(s, "Nowhere to go")


def test_update_ignores_snake_case_wire_key(db):
    created = task_store.create_task(db, "Only camelCase counts")

    patch = TaskUpdate.model_validate({"is_completed": True})

    assert patch.changes() == {}
    assert task_store.update_task(db, created.id, patch).is_completed is False


def test_update_missing_task_wins_over_bad_field_type(db):
    with pytest.raises(TaskNotFound):
        task_store.update_task(db, 999, TaskUpdate.model_validate({"isCompleted": "yes"}))
