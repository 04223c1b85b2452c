"""Student lifecycle endpoints."""

from datetime import datetime

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from rollbook.api.dependencies import StudentServiceDep
from rollbook.api.models import (
    APIResponse,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
    student_to_response,
)
from rollbook.api.results import failure_response
from rollbook.lifecycle import StudentInput
from rollbook.records import StudentFilter, StudentState

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=APIResponse[list[StudentResponse]])
def list_students(
    service: StudentServiceDep,
    state: StudentState | None = Query(default=None, description="Filter by lifecycle state"),
    name: str | None = Query(default=None, description="Name contains (case-insensitive)"),
    email: str | None = Query(default=None, description="Email contains (case-insensitive)"),
    created_after: datetime | None = Query(default=None, description="Created after instant"),
) -> APIResponse[list[StudentResponse]]:
    """List students with optional filters."""
    result = service.list_students(
        StudentFilter(state=state, name=name, email=email, created_after=created_after)
    )
    return APIResponse(data=[student_to_response(s) for s in result.unwrap()])


@router.post(
    "",
    response_model=APIResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_student(
    student: StudentCreate, service: StudentServiceDep
) -> APIResponse[StudentResponse] | JSONResponse:
    """Create a student. 409 with the existing record if the email is taken."""
    result = service.create_student(
        StudentInput(
            full_name=student.full_name,
            email=student.email,
            date_of_birth=student.date_of_birth,
        )
    )
    if result.failed:
        return failure_response(result, student_to_response)
    return APIResponse(data=student_to_response(result.data))


@router.get("/{student_id}", response_model=APIResponse[StudentResponse])
def get_student(
    student_id: str, service: StudentServiceDep
) -> APIResponse[StudentResponse] | JSONResponse:
    """Get a student by ID, active or inactive."""
    result = service.get_student(student_id)
    if result.failed:
        return failure_response(result)
    return APIResponse(data=student_to_response(result.data))


@router.put("/{student_id}", response_model=APIResponse[StudentResponse])
def update_student(
    student_id: str, student: StudentUpdate, service: StudentServiceDep
) -> APIResponse[StudentResponse] | JSONResponse:
    """Update an active student."""
    result = service.update_student(
        student_id,
        StudentInput(
            full_name=student.full_name,
            email=student.email,
            date_of_birth=student.date_of_birth,
        ),
    )
    if result.failed:
        return failure_response(result)
    return APIResponse(data=student_to_response(result.data))


@router.post("/{student_id}/deactivate", response_model=APIResponse[bool])
def deactivate_student(
    student_id: str, service: StudentServiceDep
) -> APIResponse[bool] | JSONResponse:
    """Deactivate a student (soft delete)."""
    result = service.deactivate_student(student_id)
    if result.failed:
        return failure_response(result)
    return APIResponse(data=result.data)


@router.post("/{student_id}/reactivate", response_model=APIResponse[StudentResponse])
def reactivate_student(
    student_id: str, service: StudentServiceDep
) -> APIResponse[StudentResponse] | JSONResponse:
    """Reactivate an inactive student."""
    result = service.reactivate_student(student_id)
    if result.failed:
        return failure_response(result)
    return APIResponse(data=student_to_response(result.data))


@router.delete("/{student_id}", response_model=APIResponse[bool])
def delete_student(
    student_id: str, service: StudentServiceDep
) -> APIResponse[bool] | JSONResponse:
    """Permanently delete a student inactive for the whole retention window."""
    result = service.delete_student(student_id)
    if result.failed:
        return failure_response(result)
    return APIResponse(data=result.data)
