"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from airtable_mcp import __version__
from airtable_mcp.config import DEFAULT_TABLES_CSV, Settings, get_settings


class TestSettings:
    """Verify defaults and environment parsing."""

    def test_defaults(self, monkeypatch):
        """Unset optional values fall back to their defaults."""
        for key in ("TABLES_CSV", "SSE_PING_INTERVAL", "SSE_RETRY_MS", "MANIFEST_NAME"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings(_env_file=None)

        assert settings.tables_csv == DEFAULT_TABLES_CSV
        assert settings.sse_ping_interval == 2.0
        assert settings.sse_retry_ms == 1000
        assert settings.manifest_name == "Airtable MCP"
        assert settings.manifest_version == __version__
        assert settings.airtable_api_url == "https://api.airtable.com/v0"

    def test_reads_environment(self, monkeypatch):
        """Values come from case-insensitive environment variables."""
        monkeypatch.setenv("AIRTABLE_PAT", "pat-env")
        monkeypatch.setenv("airtable_base_id", "appEnv")
        monkeypatch.setenv("ACTIONS_KEY", "key-env")
        monkeypatch.setenv("SSE_PING_INTERVAL", "15")

        settings = Settings(_env_file=None)

        assert settings.airtable_pat == "pat-env"
        assert settings.airtable_base_id == "appEnv"
        assert settings.actions_key == "key-env"
        assert settings.sse_ping_interval == 15.0
        assert settings.airtable_configured

    def test_tables_are_trimmed_and_empties_dropped(self):
        settings = Settings(_env_file=None, tables_csv=" Projects ,Clients,, Quotes")
        assert settings.tables == ["Projects", "Clients", "Quotes"]

    def test_default_tables(self):
        settings = Settings(_env_file=None, tables_csv=DEFAULT_TABLES_CSV)
        assert settings.tables == [
            "Projects",
            "Freelancers",
            "Quotes",
            "Clients",
            "Deliverables",
            "Communications",
            "ProjectTeam",
        ]

    def test_not_configured_without_base(self):
        settings = Settings(_env_file=None, airtable_pat="pat", airtable_base_id="")
        assert not settings.airtable_configured

    @pytest.mark.parametrize("interval", [0, -1])
    def test_ping_interval_must_be_positive(self, interval):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sse_ping_interval=interval)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
