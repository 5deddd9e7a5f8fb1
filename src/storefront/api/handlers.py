"""Exception handlers that turn every failure into the response envelope.

Registered once on the application so no route has to catch its own errors.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.api.responses import fail
from storefront.errors import StorefrontError

logger = structlog.get_logger(__name__)


def _first_message(messages) -> str:
    """The first human-readable message out of Protean's field -> [messages] mapping."""
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
    return "Invalid request."


def _request_validation_message(errors) -> str:
    if not errors:
        return "Invalid request."
    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message, kind=type(exc).__name__)
    return fail(exc.message, exc.status_code)


async def validation_error_handler(request: Request, exc: ValidationError):
    return fail(_first_message(exc.messages), 400, errors=exc.messages)


async def not_found_handler(request: Request, exc: ObjectNotFoundError):
    return fail("Not found.", 404)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return fail(_request_validation_message(errors), 400, errors=errors)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path)
    return fail("Internal Server Error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
