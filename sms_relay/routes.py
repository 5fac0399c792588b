"""Alert webhook endpoint."""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response

from .decoder import decode_batch
from .deps import get_dispatcher
from .dispatcher import DeliveryDispatcher
from .recipients import resolve_recipients
from .renderer import render_message

logger = structlog.get_logger()

router = APIRouter(prefix="/alert", tags=["alerts"])


@router.post("/send")
async def send_alert(
    request: Request,
    dispatcher: Annotated[DeliveryDispatcher, Depends(get_dispatcher)],
    recipients: str | None = Query(default=None),
) -> Response:
    """Relay an Alertmanager batch to every recipient as one SMS each.

    Answers 200 as soon as the batch is handed to the dispatcher; delivery
    outcomes are only reported in the logs.
    """
    # Checked before the body is read.
    targets = resolve_recipients(recipients)

    batch = decode_batch(await request.body())
    message = render_message(batch)

    await dispatcher.submit(message, targets)
    logger.info(
        "alert_batch_accepted",
        status=batch.status,
        alerts=len(batch.alerts),
        recipients=len(targets),
    )
    return Response(status_code=200)
