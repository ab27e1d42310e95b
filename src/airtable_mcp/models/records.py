"""Request and response models for the Airtable tool endpoints."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class ListRecordsRequest(BaseModel):
    """Body of POST /mcp/tools/list_records.

    Parsing is lenient on the optional knobs: a ``max`` that is not a
    positive number falls back to the default page size, and ``fields``
    is only honoured when it is a non-empty list of strings.
    """

    model_config = ConfigDict(populate_by_name=True)

    table: str | None = None
    view: str | None = None
    max: float | None = None
    fields: list[str] | None = None
    filter_by_formula: str | None = Field(default=None, alias="filterByFormula")

    @field_validator("max", mode="before")
    @classmethod
    def _coerce_max(cls, value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number) or number <= 0:
            return None
        return number

    @field_validator("fields", mode="before")
    @classmethod
    def _coerce_fields(cls, value: Any) -> list[str] | None:
        if not isinstance(value, list):
            return None
        names = [item for item in value if isinstance(item, str) and item]
        return names or None

    @property
    def page_size(self) -> int:
        """Effective Airtable pageSize: default 50, capped at 100."""
        if self.max is None:
            return DEFAULT_PAGE_SIZE
        return max(1, min(int(self.max), MAX_PAGE_SIZE))

    def to_query_params(self) -> list[tuple[str, str | int]]:
        """Airtable query parameters, arrays as repeated ``fields[]`` keys."""
        params: list[tuple[str, str | int]] = [("pageSize", self.page_size)]
        if self.view:
            params.append(("view", self.view))
        if self.fields:
            params.extend(("fields[]", name) for name in self.fields)
        if self.filter_by_formula:
            params.append(("filterByFormula", self.filter_by_formula))
        return params


class GetRecordRequest(BaseModel):
    """Body of POST /mcp/tools/get_record."""

    table: str | None = None
    id: str | None = None


class ToolResult(BaseModel):
    """Uniform ``{ok, data | error}`` envelope returned by every tool."""

    ok: bool
    data: Any = None
    error: Any = None

    @classmethod
    def success(cls, data: Any) -> "ToolResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: Any) -> "ToolResult":
        return cls(ok=False, error=error)

    def to_response(self) -> dict[str, Any]:
        """Plain dict carrying only the key that applies."""
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": self.error}


def flatten_record(record: dict[str, Any]) -> dict[str, Any]:
    """Merge an Airtable record's field map over its id."""
    return {"id": record.get("id"), **(record.get("fields") or {})}
