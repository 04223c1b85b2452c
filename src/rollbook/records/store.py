"""StudentStore - SQLite-backed Record Store for student records."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from rollbook.records.database import Database
from rollbook.records.exceptions import DuplicateEmailError, StudentNotFoundError
from rollbook.records.models import Student, StudentFilter


class StudentStore:
    """Durable keyed storage of student records.

    Every write runs in its own session and commits exactly once, so a write is
    either fully applied or not applied at all. Returned objects are detached
    from their session and safe to pass back into ``update``/``remove``.
    """

    def __init__(self, db_path: str = "rollbook.db") -> None:
        """Initialize the store with a SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    @property
    def database(self) -> Database:
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Queries ---

    def find_by_id(self, student_id: str) -> Student | None:
        """Get a student by ID, in any state.

        Args:
            student_id: The student's unique ID

        Returns:
            The Student, or None if no such record exists
        """
        session = self._db.get_session()
        try:
            return session.get(Student, student_id)
        finally:
            session.close()

    def find_by_email(self, email: str) -> Student | None:
        """Get the student owning an email, in any state.

        Args:
            email: Exact (already normalized) email value

        Returns:
            The Student, or None if the email is free
        """
        session = self._db.get_session()
        try:
            stmt = select(Student).where(Student.email == email)
            return session.execute(stmt).scalar_one_or_none()
        finally:
            session.close()

    def find_all(self, student_filter: StudentFilter | None = None) -> list[Student]:
        """List students matching every given predicate.

        Args:
            student_filter: Predicates to apply (None = all students)

        Returns:
            Matching students, ordered by created_at ascending
        """
        session = self._db.get_session()
        try:
            stmt = select(Student)

            if student_filter is not None and not student_filter.is_empty():
                if student_filter.state is not None:
                    stmt = stmt.where(Student.state == student_filter.state.value)
                if student_filter.name:
                    stmt = stmt.where(
                        Student.full_name.icontains(student_filter.name, autoescape=True)
                    )
                if student_filter.email:
                    stmt = stmt.where(
                        Student.email.icontains(student_filter.email, autoescape=True)
                    )
                if student_filter.created_after is not None:
                    stmt = stmt.where(Student.created_at > student_filter.created_after)

            stmt = stmt.order_by(Student.created_at, Student.id)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def email_exists(self, email: str, excluding_id: str | None = None) -> bool:
        """Check whether any student (other than ``excluding_id``) owns an email.

        Args:
            email: Exact (already normalized) email value
            excluding_id: Student ID to ignore, typically the one being updated

        Returns:
            True if the email is taken
        """
        session = self._db.get_session()
        try:
            stmt = select(Student.id).where(Student.email == email)
            if excluding_id is not None:
                stmt = stmt.where(Student.id != excluding_id)
            return session.execute(stmt.limit(1)).first() is not None
        finally:
            session.close()

    # --- Writes ---

    def add(self, student: Student) -> None:
        """Persist a new student.

        Args:
            student: Fully populated Student with a fresh ID

        Raises:
            DuplicateEmailError: If the email is already owned by another record
        """
        session = self._db.get_session()
        try:
            session.add(student)
            session.commit()
            session.refresh(student)
        except IntegrityError as e:
            session.rollback()
            if self.email_exists(student.email, excluding_id=student.id):
                raise DuplicateEmailError(student.email) from e
            raise
        finally:
            session.close()

    def update(self, student: Student) -> None:
        """Overwrite the mutable fields of an existing student.

        ``id`` and ``created_at`` are never rewritten.

        Args:
            student: Student carrying the new field values

        Raises:
            StudentNotFoundError: If the record no longer exists
            DuplicateEmailError: If the new email is owned by another record
        """
        session = self._db.get_session()
        try:
            stored = session.get(Student, student.id)
            if stored is None:
                raise StudentNotFoundError(f"Student with id '{student.id}' not found")

            stored.full_name = student.full_name
            stored.email = student.email
            stored.date_of_birth = student.date_of_birth
            stored.state = student.state
            stored.deactivated_at = student.deactivated_at

            session.commit()
        except IntegrityError as e:
            session.rollback()
            if self.email_exists(student.email, excluding_id=student.id):
                raise DuplicateEmailError(student.email) from e
            raise
        finally:
            session.close()

    def remove(self, student: Student) -> None:
        """Permanently delete a student.

        Args:
            student: The student to delete

        Raises:
            StudentNotFoundError: If the record no longer exists
        """
        session = self._db.get_session()
        try:
            stored = session.get(Student, student.id)
            if stored is None:
                raise StudentNotFoundError(f"Student with id '{student.id}' not found")

            session.delete(stored)
            session.commit()
        finally:
            session.close()
