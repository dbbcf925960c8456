"""
Normalized inbound call record.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class CallDirection(str, Enum):
    """Direction values reported by the platform."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


class ResponderProtocol(Protocol):
    """One-shot response capability bound to an inbound exchange."""

    def respond(self, error: Any, payload: Any) -> None:
        """Send ``payload`` back; status 500 if ``error`` is not None, else 200."""
        ...


class Call(BaseModel):
    """Read-only projection of one inbound call event.

    Field values are copied from the webhook payload as they arrive; nothing
    is parsed or converted. Missing fields are ``None``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    session: Any = Field(default=None, alias="sessionId")
    is_active: Any = Field(default=None, alias="isActive")
    direction: Any = Field(default=None, alias="direction")
    caller: Any = Field(default=None, alias="callerNumber")
    callee: Any = Field(default=None, alias="destinationNumber")
    digits: Any = Field(default=None, alias="dtmfDigits")
    recording_url: Any = Field(default=None, alias="recordingUrl")
    duration: Any = Field(default=None, alias="durationInSeconds")
    currency: Any = Field(default=None, alias="currencyCode")
    amount: Any = Field(default=None, alias="amount")
    status: Any = Field(default=None, alias="status")
    session_state: Any = Field(default=None, alias="callSessionState")
    raw_payload: dict[str, Any] = Field(default_factory=dict)

    _responder: ResponderProtocol | None = PrivateAttr(default=None)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        responder: ResponderProtocol | None = None,
    ) -> Call:
        data = dict(payload)
        call = cls.model_validate({**data, "raw_payload": data})
        call._responder = responder
        return call

    @property
    def is_inbound(self) -> bool:
        return self.direction == CallDirection.INBOUND.value

    @property
    def is_outbound(self) -> bool:
        return self.direction == CallDirection.OUTBOUND.value

    def respond(self, error: Any, payload: Any) -> None:
        if self._responder is None:
            raise RuntimeError("Call record is not bound to an inbound exchange")
        self._responder.respond(error, payload)
