"""Input shapes accepted by the RPC procedures.

Timestamps arrive as ISO-8601 strings (a bare ``YYYY-MM-DD`` means midnight
UTC) and are normalised to naive UTC before they reach a handler.
"""
import re
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field, StrictBool, StrictInt, field_validator

from tasktracker.timeutil import to_naive_utc

_DATE_ONLY = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def _expand_date_only(value):
    if isinstance(value, str) and _DATE_ONLY.match(value):
        return value + 'T00:00:00Z'
    return value


Timestamp = Annotated[datetime, BeforeValidator(_expand_date_only), AfterValidator(to_naive_utc)]


def _blank_to_none(value):
    return value or None


# an empty description is stored as null on create and update alike
Description = Annotated[Optional[str], AfterValidator(_blank_to_none)]


class TaskIdInput(BaseModel):
    id: StrictInt


class CreateTaskInput(BaseModel):
    title: str = Field(min_length=1)
    description: Description = None
    due_date: Optional[Timestamp] = None
    reminder_date: Optional[Timestamp] = None


class UpdateTaskInput(BaseModel):
    """Partial update: only fields the caller actually sent are applied."""

    id: StrictInt
    title: Optional[str] = Field(default=None, min_length=1)
    description: Description = None
    completed: Optional[StrictBool] = None
    due_date: Optional[Timestamp] = None
    reminder_date: Optional[Timestamp] = None

    @field_validator('title', 'completed')
    @classmethod
    def reject_null(cls, value, info):
        # only runs for explicitly supplied values
        if value is None:
            raise ValueError(f'{info.field_name} may not be null')
        return value

    def changes(self):
        return self.model_dump(exclude_unset=True, exclude={'id'})


class GetTaskByIdInput(TaskIdInput):
    pass


class ToggleTaskInput(TaskIdInput):
    pass


class DeleteTaskInput(TaskIdInput):
    pass
