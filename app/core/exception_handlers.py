import uuid
import logging
import traceback
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from tortoise.exceptions import BaseORMException
from app.core.exceptions import InventoryServiceError

log = logging.getLogger("inventory.errors")

INVALID_BODY = "Invalid JSON body"
# Error locations that only name the request part, not the field
_LOCATION_PREFIXES = {"body", "path", "query"}


# Generate a clean request id for every error response
def _rid():
    """Generates a unique request ID for tracing."""
    return uuid.uuid4().hex


def _error_response(status_code: int, message: str) -> JSONResponse:
    request_id = _rid()
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers={"X-Request-ID": request_id},
    )


def describe_validation_errors(errors) -> str:
    """Turns pydantic error details into one human-readable message."""
    if not errors:
        return INVALID_BODY
    first = errors[0]
    if first.get("type") == "json_invalid":
        return INVALID_BODY
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in _LOCATION_PREFIXES)
    if not field:
        return INVALID_BODY
    return f"{field}: {first.get('msg', 'invalid value')}"


# ----------- Exception Handlers (called by FastAPI) -----------

def inventory_error_handler(request: Request, exc: InventoryServiceError):
    """Handles service errors: validation (400), not found (404), conflict (409), storage (500)."""
    return _error_response(exc.status_code, exc.message)


def http_exception_handler(request: Request, exc: HTTPException):
    """Handles exceptions raised by HTTPException (e.g., unknown routes)."""
    return _error_response(exc.status_code, str(exc.detail))


def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handles unparsable bodies and missing or mistyped fields (400 Bad Request)."""
    message = describe_validation_errors(exc.errors())
    log.info(f"Rejected request to {request.url.path}: {message}")
    return _error_response(400, message)


def storage_exception_handler(request: Request, exc: BaseORMException):
    """Handles storage errors that escaped the service layer."""
    log.error(f"Storage error on path {request.url.path}: {exc}")
    return _error_response(500, str(exc))


def generic_exception_handler(request: Request, exc: Exception):
    """Handles all unhandled exceptions (500 Internal Server Error)."""
    log.error(f"Unhandled exception on path: {request.url.path}\n{traceback.format_exc()}")
    return _error_response(500, "Internal Server Error")


# ----------- Registration Function -----------

def setup_exception_handlers(app: FastAPI):
    """Registers all custom exception handlers with the FastAPI application."""
    app.add_exception_handler(InventoryServiceError, inventory_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(BaseORMException, storage_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    return app
