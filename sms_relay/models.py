"""Data models for the relay: inbound alert batches, provider replies and delivery outcomes."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ------------------------------------------------------------------
# Inbound: Alertmanager webhook payload
# ------------------------------------------------------------------


class AlertAnnotations(BaseModel):
    """Human-readable annotations attached to one alert."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    summary: str = ""
    description: str = ""

    @field_validator("summary", "description", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


class Alert(BaseModel):
    """One alert condition within a batch.

    Uses ``Field(alias="startsAt")`` to match the Alertmanager wire format.
    ``populate_by_name=True`` allows construction via either key.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    annotations: AlertAnnotations = Field(default_factory=AlertAnnotations)
    starts_at: datetime | None = Field(default=None, alias="startsAt")

    @field_validator("annotations", mode="before")
    @classmethod
    def _null_annotations(cls, v):
        return {} if v is None else v


class AlertBatch(BaseModel):
    """The full decoded webhook payload: a status and an ordered list of alerts."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str = ""
    status: str
    alerts: tuple[Alert, ...]


# ------------------------------------------------------------------
# Outbound: Twilio replies
# ------------------------------------------------------------------


class MessageAccepted(BaseModel):
    """Twilio's reply when a message was queued for delivery."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: str
    sid: str
    body: str = ""


class MessageRejected(BaseModel):
    """Twilio's error reply.

    Twilio echoes the HTTP status as an integer ``status``; some gateways
    send a textual one (``"failed"``), so both are accepted.  Either
    ``code`` or ``message`` may be missing, but not both.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: str | int | None = None
    code: int | str | None = None
    message: str | None = None
    more_info: str | None = None

    @model_validator(mode="after")
    def _has_reason(self) -> MessageRejected:
        if self.code is None and self.message is None:
            raise ValueError("error reply carries neither code nor message")
        return self


class ProviderResponse(BaseModel):
    """A decoded provider reply together with the HTTP status it came with."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    reply: MessageAccepted | MessageRejected


# ------------------------------------------------------------------
# Delivery outcomes
# ------------------------------------------------------------------


class Delivered(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["delivered"] = "delivered"
    recipient: str
    http_status: int
    provider_status: str
    message_id: str
    body: str = ""

    @property
    def severity(self) -> str:
        return "Info"


class Rejected(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["rejected"] = "rejected"
    recipient: str
    http_status: int
    provider_status: str | int | None = None
    provider_code: int | str | None = None
    provider_message: str | None = None

    @property
    def severity(self) -> str:
        return "Error"


class TransportFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["transport_failed"] = "transport_failed"
    recipient: str
    cause: str
    traceback: str | None = None

    @property
    def severity(self) -> str:
        return "Error"


class DecodeFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["decode_failed"] = "decode_failed"
    recipient: str
    http_status: int | None = None
    cause: str

    @property
    def severity(self) -> str:
        return "Error"


DeliveryOutcome = Annotated[
    Delivered | Rejected | TransportFailed | DecodeFailed,
    Field(discriminator="kind"),
]
