"""Record Store - Durable storage for student records."""

from rollbook.records.exceptions import (
    DuplicateEmailError,
    RecordStoreError,
    StudentNotFoundError,
)
from rollbook.records.models import Student, StudentFilter, StudentState
from rollbook.records.store import StudentStore

__all__ = [
    "DuplicateEmailError",
    "RecordStoreError",
    "Student",
    "StudentFilter",
    "StudentNotFoundError",
    "StudentState",
    "StudentStore",
]
