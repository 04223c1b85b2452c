"""Uniform outcome type returned by every lifecycle operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorType(StrEnum):
    """Classification of a failed operation.

    The transport layer picks its response code from this value alone.
    """

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    UNEXPECTED = "unexpected"


class ResultError(Exception):
    """Raised when the payload of a failed Result is unwrapped."""


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a lifecycle operation.

    Attributes:
        success: Whether the operation succeeded. Check before reading ``data``.
        data: Payload. On success the operation's result; on failure an optional
            detail such as the record that caused a conflict.
        message: Human-readable reason for a failure.
        error_type: Classification of a failure, None on success.
        can_reactivate: Set on duplicate-email failures when the existing owner is
            inactive, so the caller can offer reactivation instead.
    """

    success: bool
    data: T | None = None
    message: str | None = None
    error_type: ErrorType | None = None
    can_reactivate: bool = False

    @classmethod
    def ok(cls, data: T) -> Result[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        message: str,
        error_type: ErrorType,
        data: T | None = None,
        can_reactivate: bool = False,
    ) -> Result[T]:
        return cls(
            success=False,
            data=data,
            message=message,
            error_type=error_type,
            can_reactivate=can_reactivate,
        )

    @classmethod
    def not_found(cls, message: str) -> Result[T]:
        return cls.fail(message, ErrorType.NOT_FOUND)

    @classmethod
    def conflict(
        cls, message: str, data: T | None = None, can_reactivate: bool = False
    ) -> Result[T]:
        return cls.fail(message, ErrorType.CONFLICT, data=data, can_reactivate=can_reactivate)

    @property
    def failed(self) -> bool:
        return not self.success

    def unwrap(self) -> T:
        """Return the payload of a successful Result.

        Raises:
            ResultError: If the Result is a failure.
        """
        if not self.success:
            raise ResultError(f"Cannot unwrap failed result ({self.error_type}): {self.message}")
        return self.data  # type: ignore[return-value]
