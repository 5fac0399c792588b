"""Exception hierarchy for the relay.

``RequestError`` subclasses are raised on the webhook request path and
turned into HTTP responses by :func:`register_error_handlers`.
``DeliveryError`` subclasses are raised by the Twilio client inside a
single delivery attempt and never reach the webhook caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from .models import ProviderResponse

logger = structlog.get_logger()


class RelayError(Exception):
    """Base exception for all relay errors."""


# ------------------------------------------------------------------
# Request path
# ------------------------------------------------------------------


class RequestError(RelayError):
    """An error reported synchronously to the webhook caller."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingParameterError(RequestError):
    status_code = 400
    error_code = "MISSING_PARAMETER"

    def __init__(self, name: str) -> None:
        super().__init__(f"URL param '{name}' is missing")
        self.name = name


class DecodeError(RequestError):
    """The webhook body is not valid JSON or lacks required fields."""

    status_code = 400
    error_code = "DECODE_ERROR"


class RenderError(RequestError):
    status_code = 500
    error_code = "RENDER_ERROR"


# ------------------------------------------------------------------
# Delivery path
# ------------------------------------------------------------------


class DeliveryError(RelayError):
    """Failure of a single delivery attempt."""


class TransportError(DeliveryError):
    """The provider could not be reached (connection failure, timeout)."""


class ProviderRejected(DeliveryError):
    """The provider answered with a non-2xx status and a parseable reason."""

    def __init__(self, response: ProviderResponse) -> None:
        super().__init__(f"provider rejected message with HTTP {response.status_code}")
        self.response = response


class ProviderResponseMalformed(DeliveryError):
    """The provider reply could not be decoded into a known shape."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# ------------------------------------------------------------------
# FastAPI integration
# ------------------------------------------------------------------


async def _request_error_handler(request: Request, exc: RequestError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_rejected",
        path=request.url.path,
        status_code=exc.status_code,
        error_code=exc.error_code,
        error=exc.message,
    )
    return JSONResponse(
        {"error": exc.error_code, "message": exc.message},
        status_code=exc.status_code,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Translate :class:`RequestError` into JSON error responses."""
    app.add_exception_handler(RequestError, _request_error_handler)
