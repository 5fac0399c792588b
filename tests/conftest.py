"""Shared test fixtures for the sms_relay test suite."""

from __future__ import annotations

import pytest

from sms_relay.config import RelayConfig, TwilioConfig

TWILIO_MESSAGES_URL = "https://api.twilio.test/2010-04-01/Accounts/AC123/Messages.json"


@pytest.fixture
def twilio_config() -> TwilioConfig:
    return TwilioConfig(
        account_sid="AC123",
        auth_token="secret-token",
        sender="+15550001111",
        api_base_url="https://api.twilio.test",
        timeout_seconds=5.0,
    )


@pytest.fixture
def relay_config(twilio_config: TwilioConfig) -> RelayConfig:
    return RelayConfig(port=18080, log_json=False, twilio=twilio_config)


# ------------------------------------------------------------------
# Sample Alertmanager payload
# ------------------------------------------------------------------


def make_alert(
    summary: str = "High CPU",
    description: str = "cpu above 90% on node-1",
    starts_at: str = "2025-06-01T12:00:00Z",
) -> dict:
    return {
        "status": "firing",
        "labels": {"alertname": "HighCPU", "severity": "critical"},
        "annotations": {"summary": summary, "description": description},
        "startsAt": starts_at,
        "endsAt": "0001-01-01T00:00:00Z",
        "generatorURL": "http://prometheus:9090/graph",
    }


def make_payload(*, status: str = "firing", alerts: list[dict] | None = None) -> dict:
    """Build an Alertmanager webhook body (version 4)."""
    return {
        "version": "4",
        "groupKey": "{}:{alertname=\"HighCPU\"}",
        "status": status,
        "receiver": "sms",
        "groupLabels": {"alertname": "HighCPU"},
        "commonLabels": {},
        "commonAnnotations": {},
        "externalURL": "http://alertmanager:9093",
        "alerts": alerts if alerts is not None else [make_alert()],
    }
