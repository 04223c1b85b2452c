"""Integration tests for the Record Store database."""

import tempfile
from datetime import UTC, date, datetime
from pathlib import Path

import pytest
from sqlalchemy import inspect

from rollbook.records import DuplicateEmailError, Student, StudentStore
from rollbook.records.database import Database
from rollbook.records.models import EMAIL_INDEX


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield str(Path(tmpdir) / "data" / "rollbook.db")


@pytest.fixture
def database(temp_db_path: str):
    """Create a database instance with tables."""
    db = Database(temp_db_path)
    db.create_tables()
    yield db
    db.close()


@pytest.mark.integration
class TestDatabaseSetup:
    """Tests for database setup."""

    def test_database_creates_file_and_parent_dir(self, temp_db_path: str) -> None:
        db = Database(temp_db_path)
        db.create_tables()

        assert Path(temp_db_path).exists()
        db.close()

    def test_database_creates_students_table(self, database: Database) -> None:
        inspector = inspect(database.engine)

        assert "students" in inspector.get_table_names()

    def test_email_has_named_unique_index(self, database: Database) -> None:
        inspector = inspect(database.engine)
        unique_indexes = {
            index["name"]: index["column_names"]
            for index in inspector.get_indexes("students")
            if index.get("unique")
        }

        assert unique_indexes == {EMAIL_INDEX: ["email"]}

    def test_database_wal_mode(self, database: Database) -> None:
        assert database.is_wal_mode()

    def test_close_resets_engine(self, database: Database) -> None:
        _ = database.engine
        database.close()

        assert database._engine is None


@pytest.mark.integration
class TestStorePersistence:
    """Records survive reopening the database file."""

    def test_records_persist_across_instances(self, temp_db_path: str) -> None:
        student = Student(
            full_name="Ana Souza",
            email="ana@school.edu",
            date_of_birth=date(2010, 5, 4),
            created_at=datetime(2026, 1, 15, 9, 0, tzinfo=UTC),
        )
        first = StudentStore(temp_db_path)
        first.add(student)
        first.close()

        second = StudentStore(temp_db_path)
        try:
            found = second.find_by_id(student.id)
            assert found is not None
            assert found.email == "ana@school.edu"
            with pytest.raises(DuplicateEmailError):
                second.add(
                    Student(
                        full_name="Copy",
                        email="ana@school.edu",
                        date_of_birth=date(2010, 5, 4),
                    )
                )
        finally:
            second.close()
