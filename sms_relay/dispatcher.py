"""DeliveryDispatcher: fan one rendered message out to every recipient."""

from __future__ import annotations

import asyncio
import traceback
from collections.abc import Sequence
from typing import Protocol

import structlog

from .errors import ProviderRejected, ProviderResponseMalformed, TransportError
from .models import (
    DecodeFailed,
    Delivered,
    DeliveryOutcome,
    MessageAccepted,
    ProviderResponse,
    Rejected,
    TransportFailed,
)

logger = structlog.get_logger()


class MessageSender(Protocol):
    async def send_message(self, *, to: str, body: str) -> ProviderResponse: ...


class DeliveryDispatcher:
    """Send a message to N recipients concurrently, one task per recipient.

    Every attempt classifies and logs its own outcome; a failing attempt
    never cancels or delays its siblings.  The message is shared read-only
    across all attempts.

    ``submit()`` is the webhook entry point.  With ``await_delivery=False``
    (the default) it schedules the fan-out in the background and returns
    immediately, so the caller learns the batch was accepted, not that it
    was delivered.  Background batches are tracked until they finish and
    :meth:`drain` waits for them on shutdown.
    """

    def __init__(self, sender: MessageSender, *, await_delivery: bool = False) -> None:
        self._sender = sender
        self._await_delivery = await_delivery
        self._pending: set[asyncio.Task[list[DeliveryOutcome]]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def submit(self, message: str, recipients: Sequence[str]) -> None:
        """Hand a batch over for delivery, detached unless ``await_delivery`` is set."""
        if self._await_delivery:
            await self.dispatch(message, recipients)
            return

        task = asyncio.create_task(self.dispatch(message, recipients))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def dispatch(self, message: str, recipients: Sequence[str]) -> list[DeliveryOutcome]:
        """Deliver ``message`` to every recipient and return outcomes in recipient order."""
        logger.info("dispatch_started", recipients=len(recipients))
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._attempt(recipient, message)) for recipient in recipients]
        outcomes = [task.result() for task in tasks]
        logger.debug("dispatch_finished", recipients=len(recipients))
        return outcomes

    async def drain(self) -> None:
        """Wait for every background batch scheduled by :meth:`submit`."""
        if not self._pending:
            return
        logger.info("dispatcher_draining", pending=len(self._pending))
        await asyncio.gather(*self._pending, return_exceptions=True)

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------

    async def _attempt(self, recipient: str, message: str) -> DeliveryOutcome:
        outcome = await self._classify(recipient, message)
        _log_outcome(outcome)
        return outcome

    async def _classify(self, recipient: str, message: str) -> DeliveryOutcome:
        try:
            response = await self._sender.send_message(to=recipient, body=message)
        except ProviderRejected as exc:
            reply = exc.response.reply
            return Rejected(
                recipient=recipient,
                http_status=exc.response.status_code,
                provider_status=reply.status,
                provider_code=reply.code,
                provider_message=reply.message,
            )
        except TransportError as exc:
            return TransportFailed(recipient=recipient, cause=str(exc))
        except ProviderResponseMalformed as exc:
            return DecodeFailed(recipient=recipient, http_status=exc.status_code, cause=str(exc))
        except Exception as exc:
            return TransportFailed(
                recipient=recipient,
                cause=f"{type(exc).__name__}: {exc}",
                traceback="".join(traceback.format_exception(exc)),
            )

        reply = response.reply
        if not isinstance(reply, MessageAccepted):
            return DecodeFailed(
                recipient=recipient,
                http_status=response.status_code,
                cause="unexpected reply shape for a success status",
            )
        return Delivered(
            recipient=recipient,
            http_status=response.status_code,
            provider_status=reply.status,
            message_id=reply.sid,
            body=reply.body,
        )


def _log_outcome(outcome: DeliveryOutcome) -> None:
    if isinstance(outcome, Delivered):
        logger.info(
            "sms_delivered",
            severity=outcome.severity,
            recipient=outcome.recipient,
            http_status=outcome.http_status,
            sms_status=outcome.provider_status,
            sms_id=outcome.message_id,
            sms_body=outcome.body,
        )
    elif isinstance(outcome, Rejected):
        logger.error(
            "sms_rejected",
            severity=outcome.severity,
            recipient=outcome.recipient,
            http_status=outcome.http_status,
            sms_status=outcome.provider_status,
            sms_code=outcome.provider_code,
            sms_message=outcome.provider_message,
        )
    elif isinstance(outcome, TransportFailed):
        logger.error(
            "sms_transport_failed",
            severity=outcome.severity,
            recipient=outcome.recipient,
            error=outcome.cause,
            exception=outcome.traceback,
        )
    else:
        logger.error(
            "sms_response_malformed",
            severity=outcome.severity,
            recipient=outcome.recipient,
            http_status=outcome.http_status,
            error=outcome.cause,
        )
