"""SQLAlchemy models for the Record Store."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum
from typing import Any

from sqlalchemy import Date, DateTime, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

EMAIL_INDEX = "uq_students_email"


class StudentState(StrEnum):
    """Student lifecycle state enum."""

    ACTIVE = "active"
    INACTIVE = "inactive"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Student(Base):
    """Student model - one row per student record, active or not."""

    __tablename__ = "students"
    __table_args__ = (Index(EMAIL_INDEX, "email", unique=True),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    state: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deactivated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __init__(
        self,
        full_name: str,
        email: str,
        date_of_birth: date,
        id: str | None = None,
        state: str | None = None,
        created_at: datetime | None = None,
        deactivated_at: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.full_name = full_name
        self.email = email
        self.date_of_birth = date_of_birth
        self.state = state if state is not None else StudentState.ACTIVE.value
        self.created_at = created_at if created_at is not None else datetime.now(UTC)
        self.deactivated_at = deactivated_at

    @property
    def student_state(self) -> StudentState:
        """Get state as StudentState enum."""
        return StudentState(self.state)

    @student_state.setter
    def student_state(self, value: StudentState) -> None:
        """Set state from StudentState enum."""
        self.state = value.value

    @property
    def is_active(self) -> bool:
        return self.state == StudentState.ACTIVE.value

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, email={self.email!r}, state={self.state!r})>"


@dataclass
class StudentFilter:
    """Conjunction of optional predicates for listing students.

    Attributes:
        state: Only students in this lifecycle state.
        name: Case-insensitive substring of the full name.
        email: Case-insensitive substring of the email.
        created_after: Only students created strictly after this instant.
    """

    state: StudentState | None = None
    name: str | None = None
    email: str | None = None
    created_after: datetime | None = None

    def is_empty(self) -> bool:
        return (
            self.state is None
            and not self.name
            and not self.email
            and self.created_after is None
        )
