"""
Exception handlers that render every failure in one envelope:

    {"success": false, "error": {"code": "POST_NOT_FOUND", "message": "...", "details": {...}}}

    BlogHubException            its own status_code / error_code
    request or model validation 400 VALIDATION_ERROR, details.errors = [{field, message, type}]
    Starlette HTTPException     same status (unknown route, wrong method)
    SQLAlchemyError, anything   500 INTERNAL_ERROR, logged with traceback, nothing leaked
"""

from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bloghub.shared.core.exceptions import BlogHubException
from bloghub.shared.core.logging import logger
from bloghub.shared.schemas.common import ErrorDetail, ErrorResponse


HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "AUTHENTICATION_ERROR",
    status.HTTP_403_FORBIDDEN: "AUTHORIZATION_ERROR",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details or None))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _field_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Reduce pydantic error dicts to location, message and type."""
    return [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


async def handle_bloghub_error(request: Request, exc: BlogHubException) -> JSONResponse:
    logger.warning(
        "Request rejected",
        error_code=exc.error_code,
        status_code=exc.status_code,
        reason=exc.message,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


async def handle_validation_error(
    request: Request,
    exc: RequestValidationError | ValidationError,
) -> JSONResponse:
    errors = _field_errors(list(exc.errors()))
    logger.info("Invalid input", errors=errors, path=request.url.path)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        {"errors": errors},
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return error_response(exc.status_code, code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    # Full traceback goes to the log only
    event = "Database failure" if isinstance(exc, SQLAlchemyError) else "Unhandled exception"
    logger.error(event, error_type=type(exc).__name__, path=request.url.path, exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        INTERNAL_ERROR_MESSAGE,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the envelope handlers on app. Call once, before serving."""
    app.add_exception_handler(BlogHubException, handle_bloghub_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(SQLAlchemyError, handle_unexpected_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
