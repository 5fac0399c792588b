"""Decode Alertmanager webhook bodies into :class:`AlertBatch`."""

from __future__ import annotations

from pydantic import ValidationError

from .errors import DecodeError
from .models import AlertBatch


def decode_batch(raw: bytes | str) -> AlertBatch:
    """Parse and validate a webhook body.

    Unknown fields are ignored.  Raises :class:`DecodeError` if the body is
    not JSON or misses ``status`` / ``alerts``; nothing is returned on failure.
    """
    try:
        return AlertBatch.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first["loc"])
    return f"{loc}: {first['msg']}" if loc else first["msg"]
