import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import ErrorKind, TaskTrackerError, TaskValidationError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong!"

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def _error_response(status_code: int, error) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error})


async def task_error_handler(request: Request, exc: TaskTrackerError) -> JSONResponse:
    status_code = _STATUS_BY_KIND[exc.kind]
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, status_code, exc.message)
    if isinstance(exc, TaskValidationError):
        return _error_response(status_code, exc.messages)
    return _error_response(status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await task_error_handler(request, TaskValidationError.from_errors(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.debug("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    """Route every failure to a single ``{"error": ...}`` JSON response."""
    app.add_exception_handler(TaskTrackerError, task_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
