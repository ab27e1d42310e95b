"""Custom exceptions for Airtable MCP."""

from typing import Any


class GatewayError(Exception):
    """Raised when a gateway request must end in an error envelope.

    The exception handler installed by ``create_app`` turns it into
    ``{"ok": false, "error": ...}`` with ``status_code``.
    """

    def __init__(self, status_code: int, error: Any) -> None:
        self.status_code = status_code
        self.error = error
        super().__init__(f"{status_code}: {error}")


class UpstreamError(GatewayError):
    """Raised when the Airtable API call fails.

    ``error`` carries the upstream response body verbatim when there is one,
    otherwise the string form of the transport failure.
    """

    def __init__(self, error: Any, upstream_status: int | None = None) -> None:
        self.upstream_status = upstream_status
        super().__init__(500, error)
