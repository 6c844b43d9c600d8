"""
Configuration management module using Pydantic Settings.

This module provides type-safe configuration management with environment variable
support and validation for the DSTest collector.
"""

import os
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dstest.constants import DEFAULT_DB_PATH, DEFAULT_RUNS_API_URL


class Settings(BaseSettings):
    """
    Application settings with environment variable support.
    
    Every setting can be overridden via an environment variable prefixed
    with ``DSTEST_`` (e.g. ``DSTEST_RUNS_API_URL``).
    """
    
    model_config = SettingsConfigDict(
        env_prefix="DSTEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Configuration Service
    runs_api_url: str = Field(
        default=DEFAULT_RUNS_API_URL,
        description="Base URL of the test run endpoint in the configuration service"
    )
    
    # Persistence
    db_path: str = Field(
        default=DEFAULT_DB_PATH,
        description="Path to the SQLite database holding transactions and runs"
    )
    
    # HTTP Client Settings
    http_timeout: int = Field(
        default=30,
        ge=1,
        le=300,
        description="HTTP client timeout in seconds"
    )
    http_max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum HTTP retry attempts"
    )
    http_retry_delay: float = Field(
        default=1.0,
        ge=0.0,
        le=60.0,
        description="Base delay between HTTP retries in seconds"
    )
    
    # Matching
    reset_results: bool = Field(
        default=True,
        description="Clear existing results on a run before matching it again"
    )
    filter_by_api_key: bool = Field(
        default=False,
        description="Restrict the transaction pool to the run's API key"
    )
    
    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: Literal["structured", "simple"] = Field(
        default="simple",
        description="Log format type"
    )
    sanitize_logs: bool = Field(
        default=True,
        description="Sanitize sensitive information from logs"
    )
    
    @field_validator("runs_api_url")
    @classmethod
    def validate_runs_api_url(cls, v: str) -> str:
        """Require an http(s) URL and normalize it to end with a slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("runs_api_url must use http or https scheme")
        return v if v.endswith("/") else v + "/"
    
    @field_validator("db_path")
    @classmethod
    def validate_db_path(cls, v: str) -> str:
        """Ensure database path is normalized."""
        return os.path.normpath(v)


# Global settings instance
settings = Settings()
