"""Configuration and environment loading for Airtable MCP."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from airtable_mcp import __version__

DEFAULT_TABLES_CSV = (
    "Projects,Freelancers,Quotes,Clients,Deliverables,Communications,ProjectTeam"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Airtable
    airtable_pat: str | None = None
    airtable_base_id: str | None = None
    airtable_api_url: str = "https://api.airtable.com/v0"
    airtable_timeout: float = Field(default=30.0, gt=0)

    # Gateway shared secret (x-actions-key)
    actions_key: str | None = None

    # Comma-separated table allowlist returned by list_tables
    tables_csv: str = DEFAULT_TABLES_CSV

    # Manifest stream
    sse_ping_interval: float = Field(default=2.0, gt=0)  # Seconds between pings
    sse_retry_ms: int = Field(default=1000, ge=0)  # Client reconnect hint
    manifest_name: str = "Airtable MCP"
    manifest_version: str = __version__

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    shutdown_grace_seconds: int = 5

    @property
    def tables(self) -> list[str]:
        """Table names from TABLES_CSV, trimmed, empties dropped."""
        return [name.strip() for name in self.tables_csv.split(",") if name.strip()]

    @property
    def airtable_configured(self) -> bool:
        return bool(self.airtable_pat and self.airtable_base_id)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
