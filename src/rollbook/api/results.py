"""Translation of lifecycle Results into HTTP responses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.responses import JSONResponse

from rollbook.api.models import APIResponse
from rollbook.lifecycle import ErrorType

if TYPE_CHECKING:
    from collections.abc import Callable

    from pydantic import BaseModel

    from rollbook.lifecycle import Result

STATUS_BY_ERROR_TYPE = {
    ErrorType.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorType.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorType.VALIDATION: status.HTTP_400_BAD_REQUEST,
}


def status_for(error_type: ErrorType | None) -> int:
    """HTTP status for a failure classification; unknown ones map to 500."""
    if error_type is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return STATUS_BY_ERROR_TYPE.get(error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)


def failure_response(
    result: Result[Any],
    convert: Callable[[Any], BaseModel] | None = None,
) -> JSONResponse:
    """Build the error response for a failed Result.

    Args:
        result: The failed Result.
        convert: Turns the failure payload (if any) into a response model.

    Returns:
        JSONResponse with the APIResponse envelope.
    """
    data = None
    if result.data is not None and convert is not None:
        data = convert(result.data).model_dump(mode="json")
    body = APIResponse[Any](
        data=data,
        error=result.message,
        can_reactivate=result.can_reactivate,
    )
    return JSONResponse(
        status_code=status_for(result.error_type),
        content=body.model_dump(mode="json"),
    )
