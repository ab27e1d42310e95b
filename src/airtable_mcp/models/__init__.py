"""Data models for Airtable MCP."""

from airtable_mcp.models.manifest import Manifest, ToolSpec, build_manifest
from airtable_mcp.models.records import (
    GetRecordRequest,
    ListRecordsRequest,
    ToolResult,
    flatten_record,
)

__all__ = [
    "GetRecordRequest",
    "ListRecordsRequest",
    "Manifest",
    "ToolResult",
    "ToolSpec",
    "build_manifest",
    "flatten_record",
]
