"""Lifecycle Service - Student lifecycle rules and outcome reporting."""

from rollbook.lifecycle.models import StudentInput, StudentView
from rollbook.lifecycle.result import ErrorType, Result, ResultError
from rollbook.lifecycle.service import (
    DEFAULT_RETENTION_YEARS,
    RecordStore,
    StudentService,
)

__all__ = [
    "DEFAULT_RETENTION_YEARS",
    "ErrorType",
    "RecordStore",
    "Result",
    "ResultError",
    "StudentInput",
    "StudentService",
    "StudentView",
]
