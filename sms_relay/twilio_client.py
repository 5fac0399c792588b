"""Async HTTP client for the Twilio Messages API."""

from __future__ import annotations

import httpx
import structlog
from pydantic import ValidationError

from .config import TwilioConfig
from .errors import ProviderRejected, ProviderResponseMalformed, TransportError
from .models import MessageAccepted, MessageRejected, ProviderResponse

logger = structlog.get_logger()


class TwilioClient:
    """Sends SMS messages through Twilio, one form-encoded POST per message.

    A single :class:`httpx.AsyncClient` (and its connection pool) is shared
    by every concurrent delivery attempt.
    """

    def __init__(self, config: TwilioConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient | None = None

    @property
    def is_started(self) -> bool:
        return self._client is not None and not self._client.is_closed

    async def start(self) -> None:
        self._client = httpx.AsyncClient(
            auth=(self._config.account_sid, self._config.auth_token.get_secret_value()),
            headers={"Accept": "application/json"},
            timeout=httpx.Timeout(self._config.timeout_seconds),
        )
        logger.info("twilio_client_started", messages_url=self._config.messages_url)

    async def stop(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            logger.info("twilio_client_stopped")

    async def send_message(self, *, to: str, body: str) -> ProviderResponse:
        """POST one message to ``+<to>`` and decode Twilio's reply.

        Returns the accepted reply on a 2xx status.  Raises
        :class:`ProviderRejected` for a non-2xx status with an error reply,
        :class:`TransportError` if Twilio cannot be reached and
        :class:`ProviderResponseMalformed` if the reply cannot be decoded.
        """
        if self._client is None:
            raise AssertionError("Client not started")

        try:
            response = await self._client.post(
                self._config.messages_url,
                data={
                    "To": f"+{to}",
                    "From": self._config.sender,
                    "Body": body,
                },
            )
        except httpx.TransportError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        decoded = decode_response(response.status_code, response.content)
        if isinstance(decoded.reply, MessageRejected):
            raise ProviderRejected(decoded)
        return decoded


def decode_response(status_code: int, content: bytes) -> ProviderResponse:
    """Decode a Twilio reply into the success or error shape.

    The shape is chosen by status code: 2xx must carry a
    :class:`MessageAccepted`, anything else a :class:`MessageRejected`.
    """
    model = MessageAccepted if 200 <= status_code < 300 else MessageRejected
    try:
        reply = model.model_validate_json(content)
    except ValidationError as exc:
        raise ProviderResponseMalformed(
            f"cannot decode {model.__name__} reply: {exc.errors()[0]['msg']}",
            status_code=status_code,
        ) from exc
    return ProviderResponse(status_code=status_code, reply=reply)
