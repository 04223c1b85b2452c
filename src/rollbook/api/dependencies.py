"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from rollbook.lifecycle import DEFAULT_RETENTION_YEARS, StudentService
from rollbook.records import StudentStore

# Global StudentStore instance (initialized on app startup)
_student_store: StudentStore | None = None


def init_student_store(db_path: str = "rollbook.db") -> StudentStore:
    """Initialize the global StudentStore instance."""
    global _student_store  # noqa: PLW0603
    _student_store = StudentStore(db_path)
    return _student_store


def close_student_store() -> None:
    """Close the global StudentStore instance."""
    global _student_store  # noqa: PLW0603
    if _student_store is not None:
        _student_store.close()
        _student_store = None


# Global StudentService instance (initialized on app startup)
_student_service: StudentService | None = None


def init_student_service(
    store: StudentStore, retention_years: int = DEFAULT_RETENTION_YEARS
) -> StudentService:
    """Initialize the global StudentService instance."""
    global _student_service  # noqa: PLW0603
    _student_service = StudentService(store, retention_years=retention_years)
    return _student_service


def close_student_service() -> None:
    """Close the global StudentService instance."""
    global _student_service  # noqa: PLW0603
    _student_service = None


def get_student_service() -> Generator[StudentService, None, None]:
    """Dependency that provides the StudentService instance."""
    if _student_service is None:
        raise RuntimeError("StudentService not initialized. Call init_student_service() first.")
    yield _student_service


# Type alias for dependency injection
StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
