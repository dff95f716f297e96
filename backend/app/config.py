"""
PasteBin Backend — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Store limits (content size, title length, id width) and transport limits
(body size, rate limit) are both defined here.
"""

from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Attributes are grouped by concern for readability.
    """

    # ── Pastes ────────────────────────────────────────────────────────────
    # What: Maximum number of characters accepted in a paste body
    max_content_length: int = Field(default=50_000, ge=1, le=10_000_000)

    # What: Titles longer than this are truncated, never rejected
    max_title_length: int = Field(default=100, ge=1, le=1_000)

    # What: Language label stored when the client doesn't send one
    default_language: str = Field(default="plaintext", min_length=1)

    # ── Identifiers ───────────────────────────────────────────────────────
    # What: Random bytes per paste id (4 bytes = 8 hex chars, ~32 bits)
    paste_id_bytes: int = Field(default=4, ge=2, le=32)

    # What: How many fresh ids the store draws before giving up on a create
    # A candidate that collides with a live paste is discarded, never overwritten
    id_max_attempts: int = Field(default=10, ge=1, le=1_000)

    # ── Request Limits ────────────────────────────────────────────────────
    # Default: 10MB = 10 * 1024 * 1024 = 10485760
    max_body_size: int = Field(default=10_485_760, ge=1_024, le=104_857_600)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Compression ───────────────────────────────────────────────────────
    # Responses smaller than this are sent uncompressed
    gzip_minimum_size: int = Field(default=500, ge=0)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("backend_port", "port"),
    )

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # What: Per-IP sliding window rate limit (100 requests per 15 minutes)
    rate_limit_requests: int = Field(default=100, ge=1, le=100_000)
    rate_limit_window: int = Field(default=900, ge=1, le=86400)  # seconds

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # PORT and port both work
    }


# Singleton instance — imported throughout the application
settings = Settings()
