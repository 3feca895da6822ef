from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.log import get_logger

log = get_logger("errors")

DEFAULT_ERROR_MESSAGE = "Internal server error"


class ServiceError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = 400

    def __init__(self, message: str = "Validation failed", errors=None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(ServiceError):
    status_code = 404

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class ConnectorStateError(ServiceError):
    pass


class DatabaseConnectionError(ServiceError):
    pass


class SchemaWriteError(ServiceError):
    pass


def _request_path(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def error_body(request: Request, status_code: int, message: str) -> dict:
    return {
        "status_code": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": _request_path(request),
        "method": request.method,
        "message": message or DEFAULT_ERROR_MESSAGE,
    }


def _respond(request: Request, status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_body(request, status_code, message),
        headers=headers,
    )


def _format_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Validation failed"


async def service_error_handler(request: Request, exc: ServiceError):
    status_code = getattr(exc, "status_code", 500)
    if status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _respond(request, status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _respond(request, exc.status_code, message, getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _respond(request, 400, _format_validation_errors(exc.errors()))


async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _respond(request, 500, DEFAULT_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Route every error raised while serving a request through one JSON shape."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
