"""Airtable REST API wrapper (read-only)."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from airtable_mcp.config import Settings
from airtable_mcp.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def _error_body(response: httpx.Response) -> Any:
    """Upstream error body as sent: parsed JSON when possible, else text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class AirtableClient:
    """Wrapper for the Airtable base-scoped REST API."""

    name: str = "airtable"

    def __init__(self, settings: Settings) -> None:
        self.api_key = settings.airtable_pat
        self.base_id = settings.airtable_base_id
        self.api_url = settings.airtable_api_url.rstrip("/")
        self.timeout = settings.airtable_timeout

    def _url(self, *segments: str) -> str:
        path = "/".join(quote(segment, safe="") for segment in segments)
        return f"{self.api_url}/{quote(self.base_id or '', safe='')}/{path}"

    async def _get(
        self,
        url: str,
        params: list[tuple[str, str | int]] | None = None,
    ) -> dict[str, Any]:
        """GET an Airtable URL and return the decoded JSON body.

        Raises:
            UpstreamError: If the request fails, returns a non-2xx status
                or the body is not a JSON object
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    url,
                    params=params,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Airtable request failed: {e.response.status_code} {e.request.url}"
            )
            raise UpstreamError(
                _error_body(e.response), upstream_status=e.response.status_code
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Airtable request error: {e}")
            raise UpstreamError(str(e)) from e

        if not isinstance(data, dict):
            logger.error(f"Airtable returned a JSON {type(data).__name__}, expected an object")
            raise UpstreamError(
                f"unexpected Airtable response: JSON {type(data).__name__}, expected object"
            )
        return data

    async def list_records(
        self,
        table: str,
        params: list[tuple[str, str | int]] | None = None,
    ) -> list[dict[str, Any]]:
        """List raw records from a table.

        Args:
            table: Table name or id
            params: Query parameters (pageSize, view, fields[], filterByFormula)

        Returns:
            The upstream ``records`` array (empty if absent)
        """
        data = await self._get(self._url(table), params=params)
        return data.get("records") or []

    async def get_record(self, table: str, record_id: str) -> dict[str, Any]:
        """Fetch one raw record by id."""
        return await self._get(self._url(table, record_id))
