"""Application-level exceptions and FastAPI exception handlers.

Every error raised while handling a request ends up here. Operational errors
(``AppException``) carry their own status code and message; anything else is
logged and answered with a generic 500.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base operational exception: an expected failure with an HTTP status."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"

class NotFoundError(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)

class BadRequestError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(status: str, message: str) -> dict:
    return {"status": status, "message": message}

def _status_for(status_code: int) -> str:
    return "fail" if 400 <= status_code < 500 else "error"

def invalid_input_message(errors: list[dict]) -> str:
    """One line out of Pydantic error dicts: "Invalid input data. price: Field required"."""
    messages = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query"))
        msg = err.get("msg", "invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "Invalid input data. " + ". ".join(messages)

def duplicate_field_error(value: Any) -> BadRequestError:
    return BadRequestError(f"Duplicate field value: {value}. Please use another value!")

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body("fail", invalid_input_message(exc.errors())),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.info("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(
            status_code=400,
            content=_error_body("fail", "Invalid input data."),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = f"Can't find {request.url.path} on this server!"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(_status_for(exc.status_code), message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body("error", "Something went very wrong!"),
        )
