"""Custom exceptions for the Record Store."""


class RecordStoreError(Exception):
    """Base exception for Record Store errors."""


class StudentNotFoundError(RecordStoreError):
    """Student with given ID does not exist (e.g. removed by a concurrent request)."""


class DuplicateEmailError(RecordStoreError):
    """Another student record already owns this email."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Student with email '{email}' already exists")
        self.email = email
