"""Pydantic models for REST API."""

from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rollbook.records.models import StudentState

T = TypeVar("T")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None
    can_reactivate: bool = False


# Student models


class StudentFields(BaseModel):
    """Fields shared by create and update requests."""

    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=254, pattern=EMAIL_PATTERN)
    date_of_birth: date

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("full_name must not be blank")
        return value

    @field_validator("date_of_birth")
    @classmethod
    def date_of_birth_not_in_future(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("date_of_birth cannot be in the future")
        return value


class StudentCreate(StudentFields):
    """Request model for creating a student."""


class StudentUpdate(StudentFields):
    """Request model for updating a student (full replacement of editable fields)."""


class StudentResponse(BaseModel):
    """Response model for a student."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    date_of_birth: date
    state: StudentState
    is_active: bool
    created_at: datetime
    deactivated_at: datetime | None


def student_to_response(student: Any) -> StudentResponse:
    """Convert a StudentView to StudentResponse."""
    return StudentResponse.model_validate(student)
