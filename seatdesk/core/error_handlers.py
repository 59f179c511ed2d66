import logging
from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from seatdesk.core.exceptions import SeatDeskError, TransientError

logger = logging.getLogger(__name__)

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _envelope(status_code: int, error: str, message: str, details=None) -> JSONResponse:
    content = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, SeatDeskError) else SeatDeskError(str(exc))
    seat_id = getattr(error, "seat_id", None)
    details = [{"seat_id": seat_id}] if seat_id else None
    return _envelope(error.status_code, error.code, error.message, details=details)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return _envelope(
        422,
        "validation_error",
        "Request validation failed",
        details=errors,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = getattr(exc, "status_code", status.HTTP_500_INTERNAL_SERVER_ERROR)
    message = getattr(exc, "detail", None) or "HTTP error"
    error = "not_found" if status_code == status.HTTP_404_NOT_FOUND else "http_error"
    return _envelope(status_code, error, str(message))


async def operational_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Database unavailable while handling %s %s: %s", request.method, request.url.path, exc)
    error = TransientError()
    return _envelope(error.status_code, error.code, error.message)


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal server error"
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    SeatDeskError: domain_error_handler,
    RequestValidationError: validation_error_handler,
    StarletteHTTPException: http_exception_handler,
    OperationalError: operational_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
