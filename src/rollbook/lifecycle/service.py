"""StudentService - Student lifecycle state machine."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from rollbook.lifecycle.models import StudentInput, StudentView, ensure_utc, normalize_email
from rollbook.lifecycle.result import Result
from rollbook.logging import mask_email
from rollbook.records.exceptions import DuplicateEmailError, StudentNotFoundError
from rollbook.records.models import Student, StudentState

if TYPE_CHECKING:
    from collections.abc import Callable

    from rollbook.records.models import StudentFilter

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_YEARS = 5


class RecordStore(Protocol):
    """Interface the service requires from student storage."""

    def find_by_id(self, student_id: str) -> Student | None: ...

    def find_by_email(self, email: str) -> Student | None: ...

    def find_all(self, student_filter: StudentFilter | None = None) -> list[Student]: ...

    def email_exists(self, email: str, excluding_id: str | None = None) -> bool: ...

    def add(self, student: Student) -> None: ...

    def update(self, student: Student) -> None: ...

    def remove(self, student: Student) -> None: ...


def utc_now() -> datetime:
    return datetime.now(UTC)


def shift_years(moment: datetime, years: int) -> datetime:
    """Move a datetime by whole calendar years; 29 February becomes 28 February."""
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)


class StudentService:
    """Owns every business rule of the student lifecycle.

    Students move between ACTIVE and INACTIVE any number of times and can be
    purged only once they have been inactive for the whole retention window.
    Expected business outcomes (missing record, duplicate email, wrong state,
    retention not elapsed) come back as failed ``Result`` values. Only
    infrastructure errors raised by the store propagate.
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] | None = None,
        retention_years: int = DEFAULT_RETENTION_YEARS,
    ) -> None:
        """Initialize the service.

        Args:
            store: Record store used for all reads and writes.
            clock: Returns the current instant. Defaults to UTC now.
            retention_years: Years a student must stay inactive before deletion.
        """
        if retention_years < 1:
            raise ValueError("retention_years must be at least 1")
        self._store = store
        self._clock = clock if clock is not None else utc_now
        self._retention_years = retention_years

    @property
    def retention_years(self) -> int:
        return self._retention_years

    def _now(self) -> datetime:
        return ensure_utc(self._clock())

    # --- Queries ---

    def list_students(
        self, student_filter: StudentFilter | None = None
    ) -> Result[list[StudentView]]:
        """List students matching every predicate of the filter. Never fails."""
        if student_filter is not None and student_filter.created_after is not None:
            student_filter = replace(
                student_filter, created_after=ensure_utc(student_filter.created_after)
            )
        students = self._store.find_all(student_filter)
        return Result.ok([StudentView.from_student(s) for s in students])

    def get_student(self, student_id: str) -> Result[StudentView]:
        """Get a student in any state."""
        student = self._store.find_by_id(student_id)
        if student is None:
            return Result.not_found(f"Student '{student_id}' not found.")
        return Result.ok(StudentView.from_student(student))

    # --- Transitions ---

    def create_student(self, data: StudentInput) -> Result[StudentView]:
        """Create an ACTIVE student.

        Fails with CONFLICT when any record, active or inactive, already owns the
        email. The failure carries that record and ``can_reactivate`` tells
        whether it could be reactivated instead.
        """
        email = normalize_email(data.email)
        existing = self._store.find_by_email(email)
        if existing is not None:
            return self._duplicate_email(existing)

        student = Student(
            full_name=data.full_name.strip(),
            email=email,
            date_of_birth=data.date_of_birth,
            state=StudentState.ACTIVE.value,
            created_at=self._now(),
        )
        try:
            self._store.add(student)
        except DuplicateEmailError:
            # A concurrent request claimed the email between the check and the write
            existing = self._store.find_by_email(email)
            if existing is None:
                return Result.conflict("A student with this email already exists.")
            return self._duplicate_email(existing)

        logger.info("Created student %s (%s)", student.id, mask_email(email))
        return Result.ok(StudentView.from_student(student))

    def update_student(self, student_id: str, data: StudentInput) -> Result[StudentView]:
        """Overwrite name, email and date of birth of an ACTIVE student."""
        student = self._store.find_by_id(student_id)
        if student is None:
            return Result.not_found(f"Student '{student_id}' not found.")

        if not student.is_active:
            logger.info("Refused update of inactive student %s", student_id)
            return Result.conflict(
                "Student is inactive and cannot be edited. Reactivate the student first."
            )

        email = normalize_email(data.email)
        if email != student.email and self._store.email_exists(email, excluding_id=student.id):
            return Result.conflict("Another student already uses this email.")

        student.full_name = data.full_name.strip()
        student.email = email
        student.date_of_birth = data.date_of_birth
        try:
            self._store.update(student)
        except DuplicateEmailError:
            return Result.conflict("Another student already uses this email.")
        except StudentNotFoundError:
            return Result.not_found(f"Student '{student_id}' not found.")

        logger.info("Updated student %s", student_id)
        return Result.ok(StudentView.from_student(student))

    def deactivate_student(self, student_id: str) -> Result[bool]:
        """Move an ACTIVE student to INACTIVE and stamp the deactivation time."""
        student = self._store.find_by_id(student_id)
        if student is None:
            return Result.not_found(f"Student '{student_id}' not found.")

        if not student.is_active:
            return Result.conflict("Student is already inactive.")

        student.student_state = StudentState.INACTIVE
        student.deactivated_at = self._now()
        try:
            self._store.update(student)
        except StudentNotFoundError:
            return Result.not_found(f"Student '{student_id}' not found.")

        logger.info("Deactivated student %s", student_id)
        return Result.ok(True)

    def reactivate_student(self, student_id: str) -> Result[StudentView]:
        """Move an INACTIVE student back to ACTIVE and clear the deactivation time."""
        student = self._store.find_by_id(student_id)
        if student is None:
            return Result.not_found(f"Student '{student_id}' not found.")

        if student.is_active:
            return Result.conflict("Student is already active.")

        student.student_state = StudentState.ACTIVE
        student.deactivated_at = None
        try:
            self._store.update(student)
        except StudentNotFoundError:
            return Result.not_found(f"Student '{student_id}' not found.")

        logger.info("Reactivated student %s", student_id)
        return Result.ok(StudentView.from_student(student))

    def delete_student(self, student_id: str) -> Result[bool]:
        """Permanently remove a student inactive for the whole retention window.

        The window is inclusive: a student deactivated exactly
        ``retention_years`` ago can be deleted.
        """
        student = self._store.find_by_id(student_id)
        if student is None:
            return Result.not_found(f"Student '{student_id}' not found.")

        if student.is_active or student.deactivated_at is None:
            return Result.conflict("Student must be deactivated before it can be deleted.")

        eligible_at = shift_years(ensure_utc(student.deactivated_at), self._retention_years)
        if self._now() < eligible_at:
            logger.info("Refused delete of student %s before %s", student_id, eligible_at)
            return Result.conflict(
                f"Student records are retained for {self._retention_years} years after "
                f"deactivation. This student can be deleted from "
                f"{eligible_at:%Y-%m-%d %H:%M} UTC."
            )

        try:
            self._store.remove(student)
        except StudentNotFoundError:
            return Result.not_found(f"Student '{student_id}' not found.")

        logger.info("Deleted student %s", student_id)
        return Result.ok(True)

    def _duplicate_email(self, existing: Student) -> Result[StudentView]:
        can_reactivate = not existing.is_active
        message = "A student with this email already exists."
        if can_reactivate:
            message += " The existing student is inactive and can be reactivated."
        logger.debug("Duplicate email for student %s", existing.id)
        return Result.conflict(
            message, data=StudentView.from_student(existing), can_reactivate=can_reactivate
        )
