"""Directive routing between Alexa and the application API.

Flow for one invocation:
1. Classify the directive by its header's (namespace, name)
2. Authorization directives are acknowledged locally
3. Discovery, PowerController and ReportState directives are forwarded with
   the user's bearer token and the application's response is returned as-is
4. Every failure becomes an ``Alexa.ErrorResponse`` envelope
"""

from __future__ import annotations

import json
import logging
from typing import Any

from alexa_smart_home_bridge import bridge_config, bridge_logger
from alexa_smart_home_bridge.app_client import AppApiClient
from alexa_smart_home_bridge.directives import Directive, DirectiveHeader, DirectiveKind, classify, parse_directive
from alexa_smart_home_bridge.errors import MissingCredentialError, UnsupportedDirectiveError
from alexa_smart_home_bridge.responses import ErrorType, build_accept_grant_response, build_error_response

# Bearer tokens (scope, grantee) and grant codes
_SECRET_KEYS = frozenset({"token", "code"})
REDACTED = "***"


def redact_credentials(value: Any) -> Any:
    """Return a copy of an event with every token and grant code masked."""
    if isinstance(value, dict):
        return {
            key: REDACTED if key in _SECRET_KEYS and item is not None else redact_credentials(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_credentials(item) for item in value]
    return value


# AIDEV-NOTE: Single entry point for all directives - must always return exactly one envelope
class DirectiveRouter:
    """Routes one directive to a local response or the application API."""

    def __init__(
        self,
        config_obj: bridge_config.BridgeConfig,
        app_client: AppApiClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the router.

        Args:
            config_obj: Configuration with the application's base URL
            app_client: Optional pre-built API client, defaults to one built from config_obj
            logger: Optional custom logger, defaults to the bridge logger
        """
        self.config_obj = config_obj
        self.app_client = app_client or AppApiClient(config_obj)
        self.logger = logger or bridge_logger.BridgeLogger.get_logger(__name__)

    async def handle_event(self, event: dict[str, Any]) -> dict[str, Any]:
        """Route a full inbound event of the form ``{"directive": {...}}``."""
        try:
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(
                    "Received Alexa event: %s", json.dumps(redact_credentials(event), indent=2, default=str)
                )
            directive = event["directive"]
        except Exception as e:
            self.logger.error("Malformed Alexa event: %s", e, exc_info=True)
            return build_error_response(ErrorType.INTERNAL_ERROR, str(e)).to_dict()
        return await self.route(directive)

    async def route(self, directive: dict[str, Any]) -> dict[str, Any]:
        """Produce the response envelope for one directive.

        Only the header decides routing; payload and endpoint are validated
        once the directive is known to be supported.

        Args:
            directive: Raw directive mapping with header, payload and optional endpoint

        Returns:
            Response envelope as a plain dict; never raises
        """
        try:
            header = DirectiveHeader.model_validate(directive["header"])
            kind = classify(header)
            self.logger.info("Routing %s.%s as %s", header.namespace, header.name, kind.value)

            parsed = parse_directive(directive)
            if kind is DirectiveKind.AUTHORIZATION:
                return self.handle_authorization(parsed)
            return await self.forward(kind, parsed, directive)

        except UnsupportedDirectiveError as e:
            self.logger.warning("%s", e.message)
            return build_error_response(ErrorType.INVALID_DIRECTIVE, e.message).to_dict()
        except MissingCredentialError as e:
            self.logger.warning("Rejected directive: %s", e.message)
            return build_error_response(ErrorType.INVALID_AUTHORIZATION_CREDENTIAL, e.message).to_dict()
        except Exception as e:
            self.logger.error("Unexpected error routing directive: %s", e, exc_info=True)
            return build_error_response(ErrorType.INTERNAL_ERROR, str(e)).to_dict()

    def handle_authorization(self, directive: Directive) -> dict[str, Any]:
        """Acknowledge account linking; the token exchange happens in the application."""
        if not directive.grant_code:
            raise MissingCredentialError("Missing grant code")
        return build_accept_grant_response().to_dict()

    async def forward(self, kind: DirectiveKind, directive: Directive, raw_directive: dict[str, Any]) -> dict[str, Any]:
        """Forward a device or discovery directive and return the application's envelope.

        Args:
            kind: Classified directive variant, decides where the token is read from
            directive: Validated view of the directive
            raw_directive: Original mapping, sent unmodified

        Raises:
            MissingCredentialError: If the bearer token is absent; no call is made
        """
        access_token = kind.credential(directive)

        try:
            response = await self.app_client.forward_directive(raw_directive, access_token)
        except Exception as e:
            self.logger.error("%s error: %s", kind.label, e)
            return build_error_response(ErrorType.INTERNAL_ERROR, f"{kind.label} failed: {e}").to_dict()

        self.logger.debug("%s forwarded, application returned %s", kind.label, list(response))
        return response
