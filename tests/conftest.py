from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import httpx
import pytest

from alexa_smart_home_bridge import AppApiClient, BridgeConfig, DirectiveRouter

APP_BASE_URL = "https://app.example.test"
ACCESS_TOKEN = "access-token-123"


class RecordingHandler:
    """httpx.MockTransport handler that records every request it answers."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


def upstream_envelope(name: str = "Discover.Response") -> dict[str, Any]:
    return {
        "event": {
            "header": {
                "namespace": "Alexa.Discovery",
                "name": name,
                "payloadVersion": "3",
                "messageId": "upstream-1",
            },
            "payload": {"endpoints": [{"endpointId": "lamp-1", "friendlyName": "Desk lamp"}]},
        }
    }


@pytest.fixture
def access_token() -> str:
    return ACCESS_TOKEN


@pytest.fixture
def upstream_body() -> dict[str, Any]:
    return upstream_envelope()


@pytest.fixture
def make_handler() -> type[RecordingHandler]:
    """Build a recording transport handler from a responder callable."""
    return RecordingHandler


@pytest.fixture
def config() -> BridgeConfig:
    return BridgeConfig(app_base_url=APP_BASE_URL)


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler(lambda request: httpx.Response(200, json=upstream_envelope()))


@pytest.fixture
def mock_logger() -> Mock:
    return Mock(logging.Logger)


@pytest.fixture
def make_router(config: BridgeConfig, mock_logger: Mock) -> Callable[[RecordingHandler], DirectiveRouter]:
    def _make(handler: RecordingHandler) -> DirectiveRouter:
        client = AppApiClient(config, transport=httpx.MockTransport(handler))
        return DirectiveRouter(config, app_client=client, logger=mock_logger)

    return _make


@pytest.fixture
def router(make_router, recording_handler: RecordingHandler) -> DirectiveRouter:
    return make_router(recording_handler)


@pytest.fixture
def accept_grant_directive() -> dict[str, Any]:
    return {
        "header": {
            "namespace": "Alexa.Authorization",
            "name": "AcceptGrant",
            "payloadVersion": "3",
            "messageId": "m1",
        },
        "payload": {
            "grant": {"type": "OAuth2.AuthorizationCode", "code": "abc"},
            "grantee": {"type": "BearerToken", "token": "grantee-token"},
        },
    }


@pytest.fixture
def discovery_directive() -> dict[str, Any]:
    return {
        "header": {
            "namespace": "Alexa.Discovery",
            "name": "Discover",
            "payloadVersion": "3",
            "messageId": "m2",
        },
        "payload": {"scope": {"type": "BearerToken", "token": ACCESS_TOKEN}},
    }


@pytest.fixture
def power_directive() -> dict[str, Any]:
    return {
        "header": {
            "namespace": "Alexa.PowerController",
            "name": "TurnOn",
            "payloadVersion": "3",
            "messageId": "m3",
            "correlationToken": "corr-1",
        },
        "endpoint": {
            "scope": {"type": "BearerToken", "token": ACCESS_TOKEN},
            "endpointId": "lamp-1",
            "cookie": {},
        },
        "payload": {},
    }


@pytest.fixture
def report_state_directive(power_directive: dict[str, Any]) -> dict[str, Any]:
    directive = copy.deepcopy(power_directive)
    directive["header"]["namespace"] = "Alexa"
    directive["header"]["name"] = "ReportState"
    return directive
