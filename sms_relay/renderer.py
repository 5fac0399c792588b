"""Render the SMS body for an alert batch."""

from __future__ import annotations

from .errors import RenderError
from .models import AlertBatch


def render_message(batch: AlertBatch) -> str:
    """Render ``batch`` into the text sent to every recipient.

    Layout::

        Status: <status>
        <summary>: <description>
        ...

    One line per alert in batch order, each terminated by a newline.
    Same batch in, byte-identical text out.
    """
    try:
        lines = [f"Status: {batch.status}\n"]
        lines.extend(
            f"{alert.annotations.summary}: {alert.annotations.description}\n"
            for alert in batch.alerts
        )
    except Exception as exc:
        raise RenderError(f"failed to render alert batch: {exc}") from exc
    return "".join(lines)
