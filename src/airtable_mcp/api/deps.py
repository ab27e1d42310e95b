"""FastAPI dependencies resolving per-app state."""

from typing import Annotated

from fastapi import Depends, Request

from airtable_mcp.config import Settings
from airtable_mcp.models.manifest import Manifest
from airtable_mcp.tools.airtable import AirtableClient


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_manifest(request: Request) -> Manifest:
    """Manifest built once in create_app."""
    return request.app.state.manifest


def get_airtable_client(request: Request) -> AirtableClient:
    """Airtable client bound to the app's settings."""
    return request.app.state.airtable


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_app_settings)]
AppManifest = Annotated[Manifest, Depends(get_manifest)]
Airtable = Annotated[AirtableClient, Depends(get_airtable_client)]
