"""HTTP client for the application API that owns the smart-home devices."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx

from alexa_smart_home_bridge.errors import AppApiError

if TYPE_CHECKING:
    from alexa_smart_home_bridge.bridge_config import BridgeConfig


class AppApiClient:
    """Forwards directives to the application's directive handler.

    Each call opens its own ``httpx.AsyncClient`` and closes it before
    returning; nothing is shared between invocations.
    """

    def __init__(self, config: BridgeConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize the client.

        Args:
            config: Bridge configuration holding the handler URL
            transport: Optional httpx transport, used by tests to stand in for the network
        """
        self.config = config
        self._transport = transport

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        if self.config.request_timeout is not None:
            kwargs["timeout"] = self.config.request_timeout
        return kwargs

    async def forward_directive(self, directive: dict[str, Any], access_token: str) -> dict[str, Any]:
        """POST ``{"directive": directive}`` to the handler endpoint.

        Args:
            directive: The inbound directive mapping, forwarded unmodified
            access_token: Bearer token taken from the directive

        Returns:
            The parsed JSON body of a 2xx response

        Raises:
            AppApiError: On a non-2xx status, an unparsable body, or a body that is not a JSON object
            httpx.HTTPError: On transport failures (DNS, connect, read)
        """
        body = json.dumps({"directive": directive}).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Content-Length": str(len(body)),
            "Authorization": f"Bearer {access_token}",
        }

        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            resp = await client.post(self.config.handler_url, content=body, headers=headers)

        if not 200 <= resp.status_code < 300:  # noqa: PLR2004
            raise AppApiError(f"HTTP {resp.status_code}: {resp.text}", status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise AppApiError(f"Failed to parse response: {e}", status_code=resp.status_code) from e

        # Envelope contents are the application's responsibility; only the outer shape is checked
        if not isinstance(data, dict):
            raise AppApiError(f"Unexpected response shape: {type(data).__name__}", status_code=resp.status_code)
        return data
