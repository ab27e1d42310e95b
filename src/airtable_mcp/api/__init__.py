"""FastAPI routes for Airtable MCP."""

from airtable_mcp.api.events import EventStreamResponse, ManifestStream
from airtable_mcp.api.routes import router, tools_router

__all__ = ["EventStreamResponse", "ManifestStream", "router", "tools_router"]
