"""External integrations and API wrappers."""

from airtable_mcp.tools.airtable import AirtableClient

__all__ = ["AirtableClient"]
