"""Tests for sms_relay.config."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sms_relay.config import RelayConfig, TwilioConfig


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_SENDER"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestTwilioConfig:
    def test_from_env(self, clean_env):
        clean_env.setenv("TWILIO_ACCOUNT_SID", "ACenv")
        clean_env.setenv("TWILIO_AUTH_TOKEN", "env-token")
        clean_env.setenv("TWILIO_SENDER", "+15559998888")
        cfg = TwilioConfig()
        assert cfg.account_sid == "ACenv"
        assert cfg.auth_token.get_secret_value() == "env-token"
        assert cfg.sender == "+15559998888"
        assert cfg.api_base_url == "https://api.twilio.com"
        assert cfg.timeout_seconds == 10.0

    @pytest.mark.parametrize("missing", ["TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_SENDER"])
    def test_each_credential_is_required(self, clean_env, missing):
        values = {
            "TWILIO_ACCOUNT_SID": "AC1",
            "TWILIO_AUTH_TOKEN": "tok",
            "TWILIO_SENDER": "+1555",
        }
        for name, value in values.items():
            if name != missing:
                clean_env.setenv(name, value)
        with pytest.raises(ValidationError):
            TwilioConfig()

    def test_messages_url(self, twilio_config: TwilioConfig):
        assert twilio_config.messages_url == (
            "https://api.twilio.test/2010-04-01/Accounts/AC123/Messages.json"
        )

    def test_messages_url_strips_trailing_slash(self):
        cfg = TwilioConfig(account_sid="AC9", auth_token="t", sender="s", api_base_url="http://x/")
        assert cfg.messages_url == "http://x/2010-04-01/Accounts/AC9/Messages.json"

    def test_token_hidden_in_repr(self, twilio_config: TwilioConfig):
        assert "secret-token" not in repr(twilio_config)

    def test_frozen(self, twilio_config: TwilioConfig):
        with pytest.raises(ValidationError):
            twilio_config.sender = "+1000"


class TestRelayConfig:
    def test_defaults(self, twilio_config: TwilioConfig):
        cfg = RelayConfig(twilio=twilio_config)
        assert cfg.host == "0.0.0.0"
        assert cfg.port == 8080
        assert cfg.log_level == "INFO"
        assert cfg.log_json is True
        assert cfg.await_delivery is False

    def test_from_env(self, monkeypatch, twilio_config: TwilioConfig):
        monkeypatch.setenv("SMS_RELAY_PORT", "9999")
        monkeypatch.setenv("SMS_RELAY_AWAIT_DELIVERY", "true")
        cfg = RelayConfig(twilio=twilio_config)
        assert cfg.port == 9999
        assert cfg.await_delivery is True

    def test_nested_twilio_from_env(self, clean_env):
        clean_env.setenv("TWILIO_ACCOUNT_SID", "ACnested")
        clean_env.setenv("TWILIO_AUTH_TOKEN", "tok")
        clean_env.setenv("TWILIO_SENDER", "+1555")
        cfg = RelayConfig()
        assert cfg.twilio.account_sid == "ACnested"

    def test_missing_twilio_credentials_fail(self, clean_env):
        with pytest.raises(ValidationError):
            RelayConfig()
