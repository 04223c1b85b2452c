"""Data models for the Lifecycle Service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from rollbook.records.models import StudentState

if TYPE_CHECKING:
    from rollbook.records.models import Student


def ensure_utc(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from SQLite."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True)
class StudentInput:
    """Field values supplied when creating or updating a student.

    Attributes:
        full_name: Student's full name.
        email: Contact email, unique across all records.
        date_of_birth: Date of birth.
    """

    full_name: str
    email: str
    date_of_birth: date


@dataclass(frozen=True)
class StudentView:
    """Response shape of a student record.

    Attributes:
        id: Unique student ID.
        full_name: Student's full name.
        email: Contact email.
        date_of_birth: Date of birth.
        state: Lifecycle state.
        created_at: Creation instant (UTC).
        deactivated_at: Deactivation instant (UTC), None while active.
    """

    id: str
    full_name: str
    email: str
    date_of_birth: date
    state: StudentState
    created_at: datetime
    deactivated_at: datetime | None

    @property
    def is_active(self) -> bool:
        return self.state is StudentState.ACTIVE

    @classmethod
    def from_student(cls, student: Student) -> StudentView:
        return cls(
            id=student.id,
            full_name=student.full_name,
            email=student.email,
            date_of_birth=student.date_of_birth,
            state=student.student_state,
            created_at=ensure_utc(student.created_at),
            deactivated_at=(
                ensure_utc(student.deactivated_at) if student.deactivated_at is not None else None
            ),
        )
