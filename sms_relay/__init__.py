"""SMS Relay: forward Alertmanager webhooks to phones via Twilio.

Public API re-exported here for convenience::

    from sms_relay import DeliveryDispatcher, TwilioClient, create_app
"""

from .app import create_app
from .config import RelayConfig, TwilioConfig
from .decoder import decode_batch
from .dispatcher import DeliveryDispatcher
from .logging import setup_logging
from .models import (
    Alert,
    AlertBatch,
    DecodeFailed,
    Delivered,
    DeliveryOutcome,
    Rejected,
    TransportFailed,
)
from .recipients import resolve_recipients
from .renderer import render_message
from .twilio_client import TwilioClient

__all__ = [
    "Alert",
    "AlertBatch",
    "DecodeFailed",
    "Delivered",
    "DeliveryDispatcher",
    "DeliveryOutcome",
    "RelayConfig",
    "Rejected",
    "TransportFailed",
    "TwilioClient",
    "TwilioConfig",
    "create_app",
    "decode_batch",
    "render_message",
    "resolve_recipients",
    "setup_logging",
]
