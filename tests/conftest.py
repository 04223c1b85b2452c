"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from rollbook.lifecycle import StudentService
from rollbook.lifecycle.models import ensure_utc
from rollbook.records import DuplicateEmailError, Student, StudentFilter, StudentNotFoundError


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


START = datetime(2026, 1, 15, 9, 0, tzinfo=UTC)


class FakeClock:
    """Controllable clock for the service."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def _copy(student: Student) -> Student:
    return Student(
        id=student.id,
        full_name=student.full_name,
        email=student.email,
        date_of_birth=student.date_of_birth,
        state=student.state,
        created_at=student.created_at,
        deactivated_at=student.deactivated_at,
    )


class InMemoryRecordStore:
    """Dict-backed record store with the same contract as StudentStore.

    Hands out copies so that only ``add``/``update``/``remove`` change stored state.
    """

    def __init__(self) -> None:
        self.records: dict[str, Student] = {}

    def find_by_id(self, student_id: str) -> Student | None:
        student = self.records.get(student_id)
        return _copy(student) if student is not None else None

    def find_by_email(self, email: str) -> Student | None:
        for student in self.records.values():
            if student.email == email:
                return _copy(student)
        return None

    def find_all(self, student_filter: StudentFilter | None = None) -> list[Student]:
        f = student_filter or StudentFilter()
        matches = [
            s
            for s in self.records.values()
            if (f.state is None or s.state == f.state.value)
            and (not f.name or f.name.lower() in s.full_name.lower())
            and (not f.email or f.email.lower() in s.email.lower())
            and (f.created_after is None or ensure_utc(s.created_at) > f.created_after)
        ]
        matches.sort(key=lambda s: (s.created_at, s.id))
        return [_copy(s) for s in matches]

    def email_exists(self, email: str, excluding_id: str | None = None) -> bool:
        return any(
            s.email == email and s.id != excluding_id for s in self.records.values()
        )

    def add(self, student: Student) -> None:
        if self.email_exists(student.email):
            raise DuplicateEmailError(student.email)
        self.records[student.id] = _copy(student)

    def update(self, student: Student) -> None:
        if student.id not in self.records:
            raise StudentNotFoundError(f"Student with id '{student.id}' not found")
        if self.email_exists(student.email, excluding_id=student.id):
            raise DuplicateEmailError(student.email)
        self.records[student.id] = _copy(student)

    def remove(self, student: Student) -> None:
        if self.records.pop(student.id, None) is None:
            raise StudentNotFoundError(f"Student with id '{student.id}' not found")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def service(memory_store: InMemoryRecordStore, clock: FakeClock) -> StudentService:
    """StudentService over the in-memory store with a controllable clock."""
    return StudentService(memory_store, clock=clock)
