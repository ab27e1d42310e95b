"""Airtable MCP - read-only Airtable tools for agent connectors."""

__version__ = "0.1.0"

from airtable_mcp.exceptions import GatewayError, UpstreamError

__all__ = ["__version__", "GatewayError", "UpstreamError"]
