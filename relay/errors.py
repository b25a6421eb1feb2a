"""Relay exceptions and the handlers that turn them into ``{"error": ...}`` bodies."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .models import ErrorResponse

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request format or message too long"
EMPTY_MESSAGE = "Message cannot be empty"
UPSTREAM_FAILURE_MESSAGE = "Failed to get AI response"


class RelayError(Exception):
    """Base exception"""


class ConfigError(RelayError):
    """Startup configuration is missing or invalid"""


class InvalidMessageError(RelayError):
    """Request passed schema validation but its message is unusable"""


class UpstreamError(RelayError):
    """Any failure talking to the generative AI service"""


class ClientConstructionError(UpstreamError):
    """The upstream chat model could not be created"""


class GenerationError(UpstreamError):
    """The upstream call itself failed"""


class EmptyResponseError(UpstreamError):
    """The upstream answered with no candidates or no content parts"""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("JSON binding error on %s: %s", request.url.path, exc.errors())
    return _error(400, INVALID_REQUEST_MESSAGE)


async def invalid_message_handler(request: Request, exc: InvalidMessageError) -> JSONResponse:
    logger.warning("Rejected message: %s", exc)
    return _error(400, str(exc))


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    # the caller only ever sees the generic message
    logger.error("API error (%s): %s", type(exc).__name__, exc, exc_info=exc)
    return _error(500, UPSTREAM_FAILURE_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(InvalidMessageError, invalid_message_handler)
    app.add_exception_handler(UpstreamError, upstream_error_handler)
