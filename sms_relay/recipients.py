"""Recipient list parsing."""

from __future__ import annotations

from .errors import MissingParameterError

RECIPIENTS_PARAM = "recipients"


def resolve_recipients(raw: str | None) -> list[str]:
    """Split a comma-separated recipient string, preserving order.

    Tokens are not trimmed or validated; number format problems surface
    as provider rejections.  Raises :class:`MissingParameterError` when
    ``raw`` is absent or empty.
    """
    if not raw:
        raise MissingParameterError(RECIPIENTS_PARAM)
    return raw.split(",")
