"""REST API for Rollbook."""

from rollbook.api.app import create_app
from rollbook.api.models import (
    APIResponse,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)

__all__ = [
    "APIResponse",
    "StudentCreate",
    "StudentResponse",
    "StudentUpdate",
    "create_app",
]
