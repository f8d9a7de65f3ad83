"""Pydantic schemas for task request/response validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from typing import Optional, List


class TaskFields(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[date] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def date_part(cls, value):
        # Accepte aussi un datetime ISO ("2024-05-01T09:00:00Z"), on garde la date
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value


class TaskCreate(TaskFields):
    pass


class TaskReplace(TaskFields):
    """Full replace: title/description/due_date are always overwritten."""


class TaskPatch(TaskFields):
    """Sparse update: only the keys sent by the client are applied."""

    title: Optional[str] = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value):
        if value is None:
            raise ValueError("title cannot be null")
        return value


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str]
    status: str
    due_date: Optional[date]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskListResponse(BaseModel):
    page: int
    limit: int
    total: int
    tasks: List[TaskResponse]

    model_config = ConfigDict(from_attributes=True)
