"""
Configuration settings for the PromptQuest question bank.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage Backend
    # ========================================
    storage_backend: Literal["relational", "warehouse"] = Field(
        default="relational",
        description="Active question store: embedded relational database or BigQuery warehouse",
    )

    # ─── Relational (SQLite via SQLAlchemy) ─────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///db/promptquest.db",
        description="SQLAlchemy connection string for the relational store",
    )

    # ─── Warehouse (BigQuery) ───────────────────────────────────────────────────
    gcp_project_id: str | None = Field(
        default=None,
        description="Google Cloud project ID hosting the BigQuery dataset",
    )
    bigquery_dataset: str = Field(
        default="promptquest_db",
        description="BigQuery dataset name",
    )
    bigquery_table: str = Field(
        default="questions",
        description="BigQuery table name",
    )
    bigquery_location: str | None = Field(
        default=None,
        description="BigQuery job location (None lets the client decide)",
    )

    # ========================================
    # Question Bank Initialization
    # ========================================
    json_file_path: str = Field(
        default="input/promptquest-questions-test.json",
        description="Default question bank document (a 'file:' prefix is accepted)",
    )
    auto_initialize: bool = Field(
        default=True,
        description="Import the default question bank when the API starts",
    )
    clear_on_startup: bool = Field(
        default=True,
        description="Delete existing questions before the startup import",
    )

    # ========================================
    # Scoring
    # ========================================
    score_count_unresolved: bool = Field(
        default=False,
        description="Count answers for unknown question IDs toward the score total",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # API Server
    # ========================================
    api_host: str = Field(
        default="127.0.0.1",
        description="API server host",
    )
    api_port: int = Field(
        default=8080,
        description="API server port",
    )

    def get_bigquery_table_id(self) -> str:
        """Fully qualified `project.dataset.table` identifier."""
        if self.gcp_project_id:
            return f"{self.gcp_project_id}.{self.bigquery_dataset}.{self.bigquery_table}"
        return f"{self.bigquery_dataset}.{self.bigquery_table}"

    def get_sqlite_path(self) -> Path | None:
        """Database file path when the relational store points at a SQLite file."""
        prefix = "sqlite:///"
        if not self.database_url.startswith(prefix):
            return None
        raw = self.database_url[len(prefix):]
        if not raw or raw == ":memory:":
            return None
        return Path(raw)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
