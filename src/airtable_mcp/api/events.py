"""Server-Sent Events framing and the per-connection manifest stream."""

from __future__ import annotations

import asyncio
import json
import logging
from itertools import count
from typing import Any, AsyncIterator

from starlette.requests import ClientDisconnect
from starlette.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from airtable_mcp.models.manifest import Manifest

logger = logging.getLogger(__name__)

# Event type constants
EVENT_MANIFEST = "manifest"
EVENT_READY = "ready"
EVENT_PING = "ping"

SSE_HEADERS: dict[str, str] = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET, HEAD, OPTIONS",
}

_connection_ids = count(1)


def format_event(event: str, data: Any = None) -> str:
    """Frame one SSE message: ``event: <name>`` then ``data: <json>``.

    ``data`` may be a pre-serialized JSON string; anything else is dumped
    compactly. ``None`` becomes ``{}``.
    """
    if data is None:
        payload = "{}"
    elif isinstance(data, str):
        payload = data
    else:
        payload = json.dumps(data, separators=(",", ":"))
    return f"event: {event}\ndata: {payload}\n\n"


def format_retry(retry_ms: int) -> str:
    """Frame the reconnect hint sent once at the head of the stream."""
    return f"retry: {retry_ms}\n"


class ManifestStream:
    """One client's manifest discovery stream.

    Yields the retry hint, the ``manifest`` event and the ``ready`` event,
    then a ``ping`` every ``ping_interval`` seconds until closed. Closing
    releases the ping wait; it is idempotent, so a disconnect, a cancelled
    task and an explicit close racing each other release it once.
    """

    def __init__(
        self,
        manifest: Manifest,
        ping_interval: float,
        retry_ms: int,
    ) -> None:
        if ping_interval <= 0:
            raise ValueError(f"ping_interval must be positive, got {ping_interval}")
        self.connection_id = next(_connection_ids)
        self._manifest_json = manifest.to_json()
        self._ping_interval = ping_interval
        self._retry_ms = retry_ms
        self._closed = asyncio.Event()
        self.pings_sent = 0

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> bool:
        """Stop the stream. Returns True only for the call that closed it."""
        if self._closed.is_set():
            return False
        self._closed.set()
        logger.debug(
            f"Manifest stream {self.connection_id} closed after {self.pings_sent} pings"
        )
        return True

    async def _wait_for_tick(self) -> bool:
        """Wait one ping interval. False if the stream closed meanwhile."""
        try:
            await asyncio.wait_for(self._closed.wait(), timeout=self._ping_interval)
        except asyncio.TimeoutError:
            return not self.closed
        return False

    async def events(self) -> AsyncIterator[str]:
        """Async iterator of SSE frames for this connection."""
        logger.debug(f"Manifest stream {self.connection_id} opened")
        try:
            if self.closed:
                return
            yield format_retry(self._retry_ms)
            yield format_event(EVENT_MANIFEST, self._manifest_json)
            yield format_event(EVENT_READY)
            while await self._wait_for_tick():
                self.pings_sent += 1
                yield format_event(EVENT_PING)
        finally:
            self.close()


class EventStreamResponse(StreamingResponse):
    """Streaming response that owns a ManifestStream's lifetime.

    Whatever ends the response (client disconnect, failed write to a gone
    client, task cancellation on shutdown) closes the stream in ``finally``.
    Write failures after the client left are logged and dropped.
    """

    def __init__(self, stream: ManifestStream) -> None:
        self.stream = stream
        super().__init__(
            stream.events(),
            status_code=200,
            headers=SSE_HEADERS,
            media_type="text/event-stream",
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except (ClientDisconnect, OSError) as e:
            logger.debug(
                f"Manifest stream {self.stream.connection_id} write after "
                f"disconnect ignored: {e!r}"
            )
        finally:
            self.stream.close()
