"""FastAPI dependency-injection helpers for the delivery components."""

from __future__ import annotations

from fastapi import Request

from .dispatcher import DeliveryDispatcher


def get_dispatcher(request: Request) -> DeliveryDispatcher:
    return request.app.state.dispatcher
