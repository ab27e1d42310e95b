"""Tool manifest advertised on the SSE discovery stream."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from typing import Any

# Tool catalogue. Each entry becomes one ToolSpec in the manifest, in order.
TOOL_DEFINITIONS: tuple[dict[str, Any], ...] = (
    {
        "name": "list_records",
        "description": (
            "List records from any table. Optional: view, max, fields[], "
            "filterByFormula."
        ),
        "properties": {
            "table": {"type": "string"},
            "view": {"type": "string"},
            "max": {"type": "number"},
            "fields": {"type": "array", "items": {"type": "string"}},
            "filterByFormula": {"type": "string"},
        },
        "required": ["table"],
    },
    {
        "name": "get_record",
        "description": "Get one record by id.",
        "properties": {
            "table": {"type": "string"},
            "id": {"type": "string"},
        },
        "required": ["table", "id"],
    },
)


@dataclass(frozen=True)
class ToolSpec:
    """Immutable description of one invocable tool.

    Attributes:
        name: Unique tool name within the manifest.
        description: Human-readable summary shown to the agent.
        input_schema: JSON Schema object for the tool's request body.
    """

    name: str
    description: str
    input_schema: dict[str, Any]

    @classmethod
    def from_definition(cls, definition: dict[str, Any]) -> ToolSpec:
        """Build a ToolSpec from a TOOL_DEFINITIONS entry."""
        return cls(
            name=definition["name"],
            description=definition["description"],
            input_schema={
                "type": "object",
                "properties": copy.deepcopy(definition["properties"]),
                "required": list(definition["required"]),
                "additionalProperties": False,
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": copy.deepcopy(self.input_schema),
        }


@dataclass(frozen=True)
class Manifest:
    """Immutable capability manifest: service name, version and tools."""

    name: str
    version: str
    tools: tuple[ToolSpec, ...]

    def __post_init__(self) -> None:
        names = [tool.name for tool in self.tools]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate tool names in manifest: {sorted(duplicates)}")

    @property
    def tool_names(self) -> list[str]:
        return [tool.name for tool in self.tools]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "tools": [tool.to_dict() for tool in self.tools],
        }

    def to_json(self) -> str:
        """Serialize compactly, the way it goes out on the wire."""
        return json.dumps(self.to_dict(), separators=(",", ":"))


def build_manifest(
    name: str,
    version: str,
    definitions: tuple[dict[str, Any], ...] = TOOL_DEFINITIONS,
) -> Manifest:
    """Build the manifest from tool definitions.

    Args:
        name: Manifest name (e.g. "Airtable MCP")
        version: Manifest version string
        definitions: Tool definitions, defaults to TOOL_DEFINITIONS

    Returns:
        The immutable Manifest
    """
    return Manifest(
        name=name,
        version=version,
        tools=tuple(ToolSpec.from_definition(d) for d in definitions),
    )
