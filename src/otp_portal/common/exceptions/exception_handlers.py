# File: common/exceptions/exception_handlers.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from otp_portal.common.logging.logger import log_error
from otp_portal.common.schemas.standard_response import ErrorResponse


def register_exception_handlers(app: FastAPI):
    """
    Register global exception handlers for errors raised outside the handlers'
    Result values (malformed JSON bodies and genuine bugs).
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = {}
        for err in exc.errors():
            loc = err.get("loc", [])
            field = str(loc[-1]) if loc else "body"
            errors.setdefault(field, []).append(err.get("msg", "Invalid input."))

        log_error("Request validation error", extra={
            "path": request.url.path,
            "method": request.method,
            "errors": errors
        })

        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                detail="One or more validation errors occurred.",
                message="One or more validation errors occurred.",
                errors=errors
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        log_error("Unhandled exception", extra={
            "path": request.url.path,
            "method": request.method,
            "error": str(exc),
        }, exc_info=True)

        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(detail="Internal server error occurred.").model_dump()
        )
