"""FastAPI routes: liveness, the SSE manifest stream and the Airtable tools."""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, status
from starlette.responses import Response

from airtable_mcp.api.auth import require_actions_key
from airtable_mcp.api.deps import Airtable, AppManifest, AppSettings
from airtable_mcp.api.events import SSE_HEADERS, EventStreamResponse, ManifestStream
from airtable_mcp.exceptions import GatewayError
from airtable_mcp.models.records import (
    GetRecordRequest,
    ListRecordsRequest,
    ToolResult,
    flatten_record,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "airtable-mcp"
SSE_PATH = "/sse"

router = APIRouter()
tools_router = APIRouter(
    prefix="/mcp/tools",
    dependencies=[Depends(require_actions_key)],
)


# -----------------------------------------------------------------------------
# Liveness
# -----------------------------------------------------------------------------


@router.get("/health")
async def health() -> dict:
    """Liveness probe."""
    return {"ok": True, "service": SERVICE_NAME}


@router.get("/")
async def root() -> dict:
    """Liveness probe on the root path."""
    return {"ok": True, "service": SERVICE_NAME}


# -----------------------------------------------------------------------------
# Manifest stream
# -----------------------------------------------------------------------------


@router.api_route(SSE_PATH, methods=["HEAD", "OPTIONS"], include_in_schema=False)
async def sse_handshake() -> Response:
    """Connector handshake/preflight: headers only, no stream."""
    return Response(status_code=status.HTTP_200_OK, headers=SSE_HEADERS)


@router.get(SSE_PATH)
async def stream_manifest(
    manifest: AppManifest,
    settings: AppSettings,
) -> EventStreamResponse:
    """Stream the tool manifest via Server-Sent Events.

    Sends the retry hint, the manifest and a ready marker, then pings until
    the client goes away. The stream never ends on its own.

    Args:
        manifest: The app's tool manifest
        settings: The application settings

    Returns:
        EventStreamResponse with text/event-stream content type
    """
    stream = ManifestStream(
        manifest,
        ping_interval=settings.sse_ping_interval,
        retry_ms=settings.sse_retry_ms,
    )
    return EventStreamResponse(stream)


# -----------------------------------------------------------------------------
# Tool endpoints (require x-actions-key)
# -----------------------------------------------------------------------------


@tools_router.post("/list_tables")
async def list_tables(settings: AppSettings) -> dict:
    """Return the configured table allowlist."""
    return ToolResult.success(settings.tables).to_response()


@tools_router.post("/list_records")
async def list_records(
    airtable: Airtable,
    payload: Annotated[ListRecordsRequest | None, Body()] = None,
) -> dict:
    """List records from a table as flat ``{id, ...fields}`` rows.

    Raises:
        GatewayError: 400 if table is missing
        UpstreamError: 500 if Airtable fails
    """
    payload = payload or ListRecordsRequest()
    if not payload.table:
        raise GatewayError(status.HTTP_400_BAD_REQUEST, "table is required")

    records = await airtable.list_records(payload.table, payload.to_query_params())
    logger.debug(f"list_records {payload.table}: {len(records)} rows")
    return ToolResult.success([flatten_record(r) for r in records]).to_response()


@tools_router.post("/get_record")
async def get_record(
    airtable: Airtable,
    payload: Annotated[GetRecordRequest | None, Body()] = None,
) -> dict:
    """Fetch one record as a flat ``{id, ...fields}`` row.

    Raises:
        GatewayError: 400 if table or id is missing
        UpstreamError: 500 if Airtable fails
    """
    payload = payload or GetRecordRequest()
    if not payload.table or not payload.id:
        raise GatewayError(status.HTTP_400_BAD_REQUEST, "table and id are required")

    record = await airtable.get_record(payload.table, payload.id)
    return ToolResult.success(flatten_record(record)).to_response()


@tools_router.api_route(
    "/{tool_path:path}",
    methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def unknown_tool(tool_path: str) -> dict:
    """Any other path or method under /mcp/tools/, still behind the key check."""
    raise GatewayError(status.HTTP_404_NOT_FOUND, f"unknown tool: {tool_path}")
