"""Tests for the application factory."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from airtable_mcp.main import create_app, lifespan
from airtable_mcp.tools.airtable import AirtableClient


class TestCreateApp:
    """Verify create_app wires state from the given settings."""

    def test_state_comes_from_settings(self, settings):
        app = create_app(settings)

        assert app.state.settings is settings
        assert app.state.manifest.name == "Airtable MCP"
        assert app.state.manifest.tool_names == ["list_records", "get_record"]
        assert isinstance(app.state.airtable, AirtableClient)
        assert app.state.airtable.base_id == "appBase123"

    def test_manifest_name_and_version_configurable(self, settings):
        app = create_app(
            settings.model_copy(
                update={"manifest_name": "Studio Base", "manifest_version": "2.0.0"}
            )
        )

        assert app.state.manifest.name == "Studio Base"
        assert app.state.manifest.version == "2.0.0"

    def test_apps_do_not_share_settings(self, settings):
        other = settings.model_copy(update={"actions_key": "other"})

        first, second = create_app(settings), create_app(other)

        assert first.state.settings.actions_key == "secret-key"
        assert second.state.settings.actions_key == "other"

    def test_defaults_to_environment(self):
        from airtable_mcp.config import get_settings

        get_settings.cache_clear()
        app = create_app()

        assert app.state.settings is get_settings()


class TestLifespan:
    """Verify startup warnings."""

    @pytest.mark.asyncio
    async def test_warns_when_unconfigured(self, settings, caplog):
        app = create_app(
            settings.model_copy(
                update={"airtable_pat": None, "actions_key": None}
            )
        )

        with caplog.at_level(logging.WARNING, logger="airtable_mcp.main"):
            async with lifespan(app):
                pass

        messages = [record.getMessage() for record in caplog.records]
        assert "Missing AIRTABLE_PAT or AIRTABLE_BASE_ID" in messages
        assert any("ACTIONS_KEY not set" in m for m in messages)

    @pytest.mark.asyncio
    async def test_quiet_when_configured(self, app, caplog):
        with caplog.at_level(logging.WARNING, logger="airtable_mcp.main"):
            async with lifespan(app):
                pass

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


class TestErrorEnvelope:
    """Routing errors outside the tool routes use the envelope too."""

    @pytest.mark.asyncio
    async def test_unknown_path_returns_404_envelope(self, app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/does-not-exist")

        assert resp.status_code == 404
        assert resp.json() == {"ok": False, "error": "Not Found"}

    @pytest.mark.asyncio
    async def test_wrong_method_returns_405_envelope(self, app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post("/health")

        assert resp.status_code == 405
        assert resp.json() == {"ok": False, "error": "Method Not Allowed"}
        assert "GET" in resp.headers["allow"]


class TestCors:
    """CORS handling outside the manifest stream is unchanged."""

    @pytest.mark.asyncio
    async def test_preflight_on_tool_route_answered_by_middleware(self, app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.options(
                "/mcp/tools/list_records",
                headers={
                    "Origin": "https://chat.example.com",
                    "Access-Control-Request-Method": "POST",
                },
            )

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_simple_request_gets_allow_origin(self, app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/health", headers={"Origin": "https://x.example"})

        assert resp.headers["access-control-allow-origin"] == "*"
