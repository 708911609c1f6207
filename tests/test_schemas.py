# tests/test_schemas.py

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from tasktracker.schemas import CreateTaskInput, ToggleTaskInput, UpdateTaskInput


def test_create_defaults() -> None:
    data = CreateTaskInput(title="t")
    assert (data.description, data.due_date, data.reminder_date) == (None, None, None)


def test_create_requires_non_empty_title() -> None:
    with pytest.raises(ValidationError):
        CreateTaskInput(title="")
    with pytest.raises(ValidationError):
        CreateTaskInput.model_validate({})


def test_timestamps_normalised_to_naive_utc() -> None:
    data = CreateTaskInput(title="t", due_date="2024-06-01T12:00:00-04:00", reminder_date="2024-06-01")
    assert data.due_date == datetime(2024, 6, 1, 16, 0)
    assert data.reminder_date == datetime(2024, 6, 1)
    assert data.due_date.tzinfo is None


def test_update_changes_only_contains_sent_fields() -> None:
    data = UpdateTaskInput.model_validate({"id": 3, "description": None, "completed": False})
    assert data.changes() == {"description": None, "completed": False}
    assert UpdateTaskInput(id=3).changes() == {}


@pytest.mark.parametrize("field", ["title", "completed"])
def test_update_rejects_explicit_null(field: str) -> None:
    with pytest.raises(ValidationError):
        UpdateTaskInput.model_validate({"id": 1, field: None})


@pytest.mark.parametrize("task_id", [True, "1", 1.5])
def test_ids_must_be_integers(task_id) -> None:
    with pytest.raises(ValidationError):
        UpdateTaskInput.model_validate({"id": task_id})
    with pytest.raises(ValidationError):
        ToggleTaskInput.model_validate({"id": task_id})


@pytest.mark.parametrize("completed", [1, "yes", "true"])
def test_completed_must_be_boolean(completed) -> None:
    with pytest.raises(ValidationError):
        UpdateTaskInput.model_validate({"id": 1, "completed": completed})


def test_update_blank_description_becomes_null() -> None:
    data = UpdateTaskInput.model_validate({"id": 1, "description": ""})
    assert data.changes() == {"description": None}


def test_timestamp_out_of_range_after_utc_conversion() -> None:
    with pytest.raises(ValidationError, match="out of range"):
        CreateTaskInput(title="t", due_date="9999-12-31T23:00:00-05:00")
