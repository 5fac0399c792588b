"""Relay configuration loaded from environment variables.

Uses pydantic-settings so every field can be overridden via env vars.
Both models are frozen: the configuration is built once at startup and
passed explicitly into the app, the Twilio client and the dispatcher.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TwilioConfig(BaseSettings):
    """Twilio account credentials and API endpoint.

    ``account_sid``, ``auth_token`` and ``sender`` have no defaults, so a
    process started without them fails validation and refuses to start.
    """

    model_config = SettingsConfigDict(env_prefix="TWILIO_", frozen=True)

    account_sid: str = Field(description="Twilio account SID")
    auth_token: SecretStr = Field(description="Twilio auth token")
    sender: str = Field(description="Sender phone number or messaging service id")
    api_base_url: str = Field(
        default="https://api.twilio.com",
        description="Base URL of the Twilio REST API",
    )
    timeout_seconds: float = Field(default=10.0, description="HTTP request timeout")

    @property
    def messages_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/2010-04-01/Accounts/{self.account_sid}/Messages.json"


class RelayConfig(BaseSettings):
    """Top-level relay configuration.

    All env vars are prefixed with ``SMS_RELAY_``; the nested Twilio
    settings use their own ``TWILIO_`` prefix.
    """

    model_config = SettingsConfigDict(env_prefix="SMS_RELAY_", frozen=True)

    # --- Server -------------------------------------------------------------
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Bind port")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(
        default=True,
        description="Use JSON log output (True for prod, False for dev)",
    )

    # --- Delivery -----------------------------------------------------------
    await_delivery: bool = Field(
        default=False,
        description="Wait for every delivery attempt before answering the webhook",
    )

    twilio: TwilioConfig = Field(default_factory=TwilioConfig)
