"""Directive models for inbound Alexa Smart Home requests.

A directive arrives as ``{"directive": {"header": ..., "payload": ..., "endpoint": ...}}``.
These models give a typed, read-only view of the parts the router inspects.
Unknown fields are accepted and left alone; the original mapping is what gets
forwarded to the application API.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from alexa_smart_home_bridge.errors import MissingCredentialError, UnsupportedDirectiveError

AUTHORIZATION_NAMESPACE = "Alexa.Authorization"
DISCOVERY_NAMESPACE = "Alexa.Discovery"
POWER_CONTROLLER_NAMESPACE = "Alexa.PowerController"
ALEXA_NAMESPACE = "Alexa"
REPORT_STATE_NAME = "ReportState"


class _DirectiveModel(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)


class DirectiveHeader(_DirectiveModel):
    """Classification key and bookkeeping for a directive.

    Attributes:
        namespace: Directive category, e.g. ``Alexa.PowerController``
        name: Action within the namespace, e.g. ``TurnOn``
        payload_version: Smart Home API payload version (``"3"``)
        message_id: Alexa-assigned id of the inbound message
    """

    namespace: str
    name: str
    payload_version: str | None = Field(default=None, alias="payloadVersion")
    message_id: str | None = Field(default=None, alias="messageId")


class Scope(_DirectiveModel):
    """Bearer scope attached to a payload or an endpoint."""

    type: str | None = None
    token: str | None = None


class Grant(_DirectiveModel):
    """Authorization grant sent with ``AcceptGrant``."""

    type: str | None = None
    code: str | None = None


class DirectivePayload(_DirectiveModel):
    scope: Scope | None = None
    grant: Grant | None = None


class DirectiveEndpoint(_DirectiveModel):
    endpoint_id: str | None = Field(default=None, alias="endpointId")
    scope: Scope | None = None


class Directive(_DirectiveModel):
    """Typed view over an inbound directive."""

    header: DirectiveHeader
    payload: DirectivePayload = Field(default_factory=DirectivePayload)
    endpoint: DirectiveEndpoint | None = None

    @property
    def grant_code(self) -> str | None:
        return self.payload.grant.code if self.payload.grant else None

    @property
    def payload_token(self) -> str | None:
        return self.payload.scope.token if self.payload.scope else None

    @property
    def endpoint_token(self) -> str | None:
        if self.endpoint is None or self.endpoint.scope is None:
            return None
        return self.endpoint.scope.token


# AIDEV-NOTE: Closed set of routable directive variants; everything else is INVALID_DIRECTIVE
class DirectiveKind(str, Enum):
    """Supported directive variants."""

    AUTHORIZATION = "authorization"
    DISCOVERY = "discovery"
    POWER_CONTROL = "power_control"
    REPORT_STATE = "report_state"

    @property
    def label(self) -> str:
        """Operation label used in ``INTERNAL_ERROR`` messages for forwarded kinds."""
        return _KIND_LABELS[self]

    def credential(self, directive: Directive) -> str:
        """Return the bearer token for a forwarded directive.

        Discovery carries its token in ``payload.scope``; device-addressed
        directives carry it in ``endpoint.scope``.

        Raises:
            MissingCredentialError: If the token is absent or empty
        """
        token = directive.payload_token if self is DirectiveKind.DISCOVERY else directive.endpoint_token
        if not token:
            raise MissingCredentialError("Missing access token")
        return token


_KIND_LABELS = {
    DirectiveKind.DISCOVERY: "Discovery",
    DirectiveKind.POWER_CONTROL: "Power control",
    DirectiveKind.REPORT_STATE: "State report",
}

_NAMESPACE_KINDS = {
    AUTHORIZATION_NAMESPACE: DirectiveKind.AUTHORIZATION,
    DISCOVERY_NAMESPACE: DirectiveKind.DISCOVERY,
    POWER_CONTROLLER_NAMESPACE: DirectiveKind.POWER_CONTROL,
}


def classify(header: DirectiveHeader) -> DirectiveKind:
    """Map a directive header onto its supported variant.

    Args:
        header: Header of the inbound directive

    Returns:
        The matching DirectiveKind

    Raises:
        UnsupportedDirectiveError: For unknown namespaces, or ``Alexa`` directives
            other than ``ReportState``
    """
    kind = _NAMESPACE_KINDS.get(header.namespace)
    if kind is not None:
        return kind
    if header.namespace == ALEXA_NAMESPACE:
        if header.name == REPORT_STATE_NAME:
            return DirectiveKind.REPORT_STATE
        raise UnsupportedDirectiveError(f"Unsupported directive: {header.namespace}.{header.name}")
    raise UnsupportedDirectiveError(f"Unsupported namespace: {header.namespace}")


def parse_directive(raw: dict[str, Any]) -> Directive:
    """Validate a raw directive mapping.

    Raises:
        pydantic.ValidationError: If the header is missing or fields have the wrong shape
    """
    return Directive.model_validate(raw)
