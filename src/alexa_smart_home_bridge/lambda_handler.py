"""AWS Lambda entry point for the Alexa Smart Home skill.

Configure the application API with ``APP_BASE_URL`` (and optionally
``APP_HANDLER_PATH``, ``APP_OAUTH_TOKEN_PATH``, ``APP_REQUEST_TIMEOUT``), or
point ``BRIDGE_CONFIG_PATH`` at a YAML file or directory of YAML files.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any

from alexa_smart_home_bridge import bridge_config, bridge_logger
from alexa_smart_home_bridge.responses import ErrorType, build_error_response
from alexa_smart_home_bridge.router import DirectiveRouter

logger = bridge_logger.BridgeLogger.get_logger(__name__)


def load_bridge_config() -> bridge_config.BridgeConfig:
    """Load configuration from ``BRIDGE_CONFIG_PATH`` if set, else from the environment."""
    config_path = os.getenv("BRIDGE_CONFIG_PATH")
    if config_path:
        return bridge_config.load_config(config_path, bridge_config.BridgeConfig)
    return bridge_config.BridgeConfig.from_env()


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:  # noqa: ARG001
    """Handle one Alexa directive event and return its response envelope."""
    try:
        router = DirectiveRouter(load_bridge_config())
    except Exception as e:
        logger.error("Bridge configuration invalid: %s", e)
        return build_error_response(ErrorType.INTERNAL_ERROR, str(e)).to_dict()
    return asyncio.run(router.handle_event(event))
