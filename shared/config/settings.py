"""Environment-bound configuration objects.

This module provides Pydantic BaseSettings-based configuration loading from .env files.
Each settings group accepts several alias names so that existing deployments keep
working (e.g., CLAUDE_API_KEY and MODEL_API_KEY both set the engine key).

Example:
    from shared.config.settings import get_settings

    settings = get_settings()  # Cached singleton
    max_rounds = settings.governance.max_rounds
    limit = settings.context.tool_output_limit
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


load_dotenv()


class EngineSettings(BaseSettings):
    """Reasoning engine endpoint, credentials and generation parameters."""

    model: str = Field(
        default="claude-sonnet-4-20250514",
        validation_alias=AliasChoices("MODEL_ID", "CLAUDE_MODEL"),
    )
    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("MODEL_API_KEY", "CLAUDE_API_KEY", "ANTHROPIC_API_KEY"),
    )
    base_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("MODEL_BASE_URL", "CLAUDE_API_URL"),
    )
    max_tokens: int = Field(
        default=8192,
        ge=1,
        validation_alias=AliasChoices("MODEL_MAX_TOKENS", "CLAUDE_MAX_TOKENS"),
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("MODEL_TEMPERATURE", "CLAUDE_TEMPERATURE"),
    )
    timeout_seconds: int = Field(
        default=300,
        ge=1,
        validation_alias=AliasChoices("MODEL_TIMEOUT", "CLAUDE_TIMEOUT"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class GovernanceSettings(BaseSettings):
    """Runtime limits for the conversation drivers and the edit tools.

    - max_rounds: round ceiling for every driver (1-500, default: 100)
    - max_edits_per_call: upper bound for one multi_edit batch (default: 50)
    """

    max_rounds: int = Field(default=100, ge=1, le=500, alias="MAX_ROUNDS")
    max_edits_per_call: int = Field(default=50, ge=1, le=50)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class ContextSettings(BaseSettings):
    """Thresholds used by the context compactor.

    Line thresholds are pass-through limits per result shape; ``tool_output_limit``
    is the flat character cap applied to every result after shape compaction.
    """

    search_threshold: int = 30
    read_threshold: int = 2000
    listing_threshold: int = 100
    head_lines: int = 50
    tail_lines: int = 10
    window_lines: int = 50
    line_char_limit: int = 2000
    tool_output_limit: int = Field(default=30_000, ge=1, alias="TOOL_OUTPUT_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class AuditSettings(BaseSettings):
    """Audit sink location.

    Records land in ``<root_dir>/messages/<source>/NNN_<source>_message.json`` and
    the directory is wiped at the start of every task.
    """

    enabled: bool = Field(default=True, alias="AUDIT_ENABLED")
    root_dir: str = Field(default="bin", alias="AUDIT_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    log_dir: str = Field(default="logs", alias="LOG_DIR")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """Root application settings loaded from .env file.

    Hierarchical structure containing five nested settings groups:
    - engine: reasoning engine endpoint and generation parameters
    - governance: round ceiling and edit limits
    - context: compactor thresholds
    - audit: audit sink location
    - observability: logging

    Use get_settings() to obtain a cached singleton instance.
    """

    environment: str = Field(default="dev", alias="APP_ENV")
    engine: EngineSettings = Field(default_factory=EngineSettings)
    governance: GovernanceSettings = Field(default_factory=GovernanceSettings)
    context: ContextSettings = Field(default_factory=ContextSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        case_sensitive=False,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance.

    Returns:
        Settings: Cached application settings instance
    """
    return Settings()
