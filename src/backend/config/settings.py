"""Centralized application settings loaded from environment variables.

All configuration is defined once here. Other modules should import
``get_settings()`` rather than calling ``os.getenv()`` directly.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide configuration backed by environment variables.

    Field names are **lowercased** versions of the env-var names.
    ``pydantic-settings`` maps them automatically (case-insensitive).

    Example::

        settings = Settings()  # reads .env + real env
        endpoint = settings.azure_ai_project_endpoint
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- Azure AI / Foundry ------------------------------------------------

    azure_ai_project_endpoint: str = ""
    """Foundry project endpoint URL."""

    azure_ai_model_deployment_name: str = "gpt-4o"
    """Default model deployment shared by all agents unless overridden."""

    azure_ai_supervisor_model: str | None = None
    """Model override for the supervisor. Falls back to default."""

    azure_ai_meet_analyst_model: str | None = None
    """Model override for the meet performance analyst. Falls back to default."""

    azure_ai_summary_model: str | None = None
    """Model override for the meet summary agent. Falls back to default."""

    azure_client_id: str | None = None
    """Managed-identity client ID (None → system-assigned)."""

    # -- ClickHouse --------------------------------------------------------

    clickhouse_host: str = "localhost"
    """ClickHouse server hostname."""

    clickhouse_port: int = 8123
    """ClickHouse HTTP(S) port."""

    clickhouse_username: str = "default"
    """ClickHouse user."""

    clickhouse_password: str = ""
    """ClickHouse password."""

    clickhouse_database: str = "default"
    """Database holding the meet results table."""

    clickhouse_secure: bool = False
    """Use HTTPS for the ClickHouse connection."""

    meet_results_table: str = "powerlifting-records"
    """Table queried by the ``get_meet_results`` tool."""

    # -- Query compilation -------------------------------------------------

    strict_unknown_columns: bool = True
    """Fail compilation on unknown filter columns (False → drop the clause)."""

    # -- Orchestration -----------------------------------------------------

    max_turns: int = 12
    """Upper bound on agent turns per network run."""

    run_timeout_seconds: float = 120.0
    """Wall-clock budget for one run, enforced by the API layer."""

    max_history_threads: int = 1000
    """Upper bound on threads kept by the in-memory history store."""


def get_settings() -> Settings:
    """Return the process-wide ``Settings`` instance.

    The instance is built once at import time, so the environment and
    ``.env`` file are read once per process.

    Returns:
        The global ``Settings`` object.
    """
    return _settings


_settings = Settings()
