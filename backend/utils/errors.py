# backend/utils/errors.py
import logging
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from backend.utils.response import send_error

logger = logging.getLogger("backend.errors")

SERVER_ERROR = "Server error"


class ApiError(Exception):
    """An expected failure that maps straight onto an error envelope."""

    def __init__(self, status_code: int, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class ValidationFailed(ApiError):
    def __init__(self, errors: List[str]):
        super().__init__(status.HTTP_400_BAD_REQUEST, "Validation failed", errors)


class NotAuthorized(ApiError):
    def __init__(self, message: str):
        super().__init__(status.HTTP_401_UNAUTHORIZED, message)


def server_error(request: Request, exc: Exception):
    """500 envelope; the exception text is only exposed outside production."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.is_production:
        return send_error(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR)
    return send_error(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR, [str(exc)])


def _describe(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError):
        return send_error(exc.status_code, exc.message, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return send_error(status.HTTP_400_BAD_REQUEST, "Validation failed", [_describe(e) for e in exc.errors()])

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        return server_error(request, exc)
