"""Exception types raised while routing a directive.

The router converts every one of these into an ``ErrorResponse`` envelope,
so none of them ever reaches the invocation's caller.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for errors raised by the bridge itself."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class MissingCredentialError(BridgeError):
    """A grant code or bearer token is absent from its expected location."""

    def __init__(self, message: str = "Missing access token") -> None:
        super().__init__("INVALID_AUTHORIZATION_CREDENTIAL", message)


class UnsupportedDirectiveError(BridgeError):
    """The (namespace, name) pair is not one the bridge routes."""

    def __init__(self, message: str) -> None:
        super().__init__("INVALID_DIRECTIVE", message)


class AppApiError(BridgeError):
    """The application API answered with a non-2xx status or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__("INTERNAL_ERROR", message)
        self.status_code = status_code
