"""Bridge between Alexa Smart Home directives and an application's HTTP API."""

from .app_client import AppApiClient
from .bridge_config import BridgeConfig, load_config
from .bridge_logger import BridgeLogger, LoggerConfig
from .directives import Directive, DirectiveHeader, DirectiveKind, classify
from .errors import AppApiError, BridgeError, MissingCredentialError, UnsupportedDirectiveError
from .responses import (
    ErrorType,
    ResponseEnvelope,
    build_accept_grant_response,
    build_error_response,
    generate_message_id,
)
from .router import DirectiveRouter

__all__ = [
    "AppApiClient",
    "AppApiError",
    "BridgeConfig",
    "BridgeError",
    "BridgeLogger",
    "Directive",
    "DirectiveHeader",
    "DirectiveKind",
    "DirectiveRouter",
    "ErrorType",
    "LoggerConfig",
    "MissingCredentialError",
    "ResponseEnvelope",
    "UnsupportedDirectiveError",
    "build_accept_grant_response",
    "build_error_response",
    "classify",
    "generate_message_id",
    "load_config",
]
