# File: api/result_mapping.py

from typing import Any, assert_never

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette import status

from otp_portal.common.results.result import (
    DependencyFailed,
    DependencyFailedReason,
    PreconditionFailed,
    PreconditionFailedReason,
    Result,
    Success,
    Unauthorized,
    ValidationFailed,
)
from otp_portal.common.results.validation import errors_to_dict
from otp_portal.common.schemas.standard_response import ErrorResponse, StandardResponse


def _error(status_code: int, detail: str, error_code: str = None, errors=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=detail, message=detail, error_code=error_code, errors=errors).model_dump()
    )


def status_code_for(result: Result[Any]) -> int:
    if isinstance(result, Success):
        return status.HTTP_200_OK
    if isinstance(result, ValidationFailed):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(result, PreconditionFailed):
        if result.reason is PreconditionFailedReason.NOT_FOUND:
            return status.HTTP_404_NOT_FOUND
        return status.HTTP_412_PRECONDITION_FAILED
    if isinstance(result, DependencyFailed):
        if result.reason is DependencyFailedReason.TIMEOUT:
            return status.HTTP_504_GATEWAY_TIMEOUT
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(result, Unauthorized):
        return status.HTTP_401_UNAUTHORIZED
    assert_never(result)


def to_response(result: Result[Any]) -> JSONResponse:
    """Render a handler result as the service's JSON envelope."""
    code = status_code_for(result)
    if isinstance(result, Success):
        body = StandardResponse.success(data=result.value, message=result.message, code=code)
        return JSONResponse(status_code=code, content=jsonable_encoder(body))
    if isinstance(result, ValidationFailed):
        return _error(code, "One or more validation errors occurred.", errors=errors_to_dict(result.errors))
    if isinstance(result, (PreconditionFailed, DependencyFailed)):
        return _error(code, result.message, error_code=result.reason.value)
    return _error(code, result.message)
