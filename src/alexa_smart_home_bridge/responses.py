"""Response envelopes produced locally by the bridge.

Forwarded directives return the application's body untouched; only the
authorization acknowledgment and error responses are built here.
"""

from __future__ import annotations

import random
import time
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PAYLOAD_VERSION = "3"
ERROR_NAMESPACE = "Alexa"
ERROR_NAME = "ErrorResponse"
ACCEPT_GRANT_NAMESPACE = "Alexa.Authorization"
ACCEPT_GRANT_RESPONSE_NAME = "AcceptGrant.Response"


class ErrorType(str, Enum):
    """Error types reported in ``ErrorResponse`` payloads."""

    INVALID_AUTHORIZATION_CREDENTIAL = "INVALID_AUTHORIZATION_CREDENTIAL"
    INVALID_DIRECTIVE = "INVALID_DIRECTIVE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def generate_message_id() -> str:
    """Return a practically unique id from the current epoch millis and a random suffix."""
    return f"msg_{int(time.time() * 1000)}_{random.randint(0, 999)}"  # noqa: S311


class EventHeader(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    namespace: str
    name: str
    payload_version: str = Field(default=PAYLOAD_VERSION, alias="payloadVersion")
    message_id: str = Field(default_factory=generate_message_id, alias="messageId")


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: EventHeader
    payload: dict[str, Any] = Field(default_factory=dict)


class ResponseEnvelope(BaseModel):
    """Outbound ``{"event": {"header": ..., "payload": ...}}`` structure."""

    model_config = ConfigDict(frozen=True)

    event: Event

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the Alexa wire field names."""
        return self.model_dump(by_alias=True)


def build_accept_grant_response() -> ResponseEnvelope:
    """Acknowledge an ``AcceptGrant`` directive with an empty payload."""
    return ResponseEnvelope(
        event=Event(header=EventHeader(namespace=ACCEPT_GRANT_NAMESPACE, name=ACCEPT_GRANT_RESPONSE_NAME))
    )


def build_error_response(error_type: ErrorType | str, message: str) -> ResponseEnvelope:
    """Build an ``Alexa.ErrorResponse`` envelope.

    Args:
        error_type: One of the ErrorType values
        message: Human readable description placed in the payload

    Returns:
        Envelope with ``{"type": error_type, "message": message}`` as payload
    """
    type_value = error_type.value if isinstance(error_type, ErrorType) else error_type
    return ResponseEnvelope(
        event=Event(
            header=EventHeader(namespace=ERROR_NAMESPACE, name=ERROR_NAME),
            payload={"type": type_value, "message": message},
        )
    )
