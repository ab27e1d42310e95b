"""Global test configuration for Airtable MCP."""

import os

import pytest

from airtable_mcp.config import Settings


@pytest.fixture(autouse=True, scope="session")
def _set_test_env_vars():
    """Set dummy environment variables for Settings validation.

    Only sets values that aren't already present, so real env vars take
    precedence (useful for integration tests).
    """
    defaults = {
        "AIRTABLE_PAT": "test-airtable-pat",
        "AIRTABLE_BASE_ID": "appTestBase",
        "ACTIONS_KEY": "test-actions-key",
    }
    originals = {}
    for key, value in defaults.items():
        if key not in os.environ:
            os.environ[key] = value
            originals[key] = None
        else:
            originals[key] = os.environ[key]

    # Clear the lru_cache on get_settings so it picks up the new env vars
    from airtable_mcp.config import get_settings
    get_settings.cache_clear()

    yield

    # Restore original env state
    for key, original in originals.items():
        if original is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Explicit settings, independent of the environment and any .env file."""
    return Settings(
        _env_file=None,
        airtable_pat="pat-test",
        airtable_base_id="appBase123",
        actions_key="secret-key",
        tables_csv="Projects, Clients,,Quotes ",
        sse_ping_interval=0.05,
        sse_retry_ms=1000,
    )


@pytest.fixture
def app(settings):
    """A fresh application bound to the test settings."""
    from airtable_mcp.main import create_app

    return create_app(settings)
