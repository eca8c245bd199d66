"""
Configuration management using Pydantic Settings.

Loads environment variables with validation and defaults.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from the project root (parent of src/) if present
_project_root = Path(__file__).parent.parent.parent
load_dotenv(dotenv_path=_project_root / ".env", override=False)


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings have defaults suitable for the public cBioPortal instance.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================================================
    # cBioPortal Configuration
    # ========================================================================

    cbioportal_url: str = Field(
        default="https://www.cbioportal.org",
        description="Portal base URL used for generated navigation links",
    )
    cbioportal_api_url: Optional[str] = Field(
        default=None,
        description="REST API base URL (defaults to {cbioportal_url}/api)",
    )
    rest_timeout_seconds: int = Field(
        default=30,
        ge=1,
        le=300,
        description="HTTP request timeout",
    )
    rest_max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for requests failing on timeout or connect errors",
    )

    # ========================================================================
    # Caching Configuration
    # ========================================================================

    cache_enabled: bool = Field(
        default=True,
        description="Enable in-memory caching of catalog lookups",
    )
    gene_cache_ttl_seconds: int = Field(
        default=3600,
        ge=1,
        le=86400,
        description="TTL for gene validity entries",
    )
    study_cache_ttl_seconds: int = Field(
        default=1800,
        ge=1,
        le=86400,
        description="TTL for study records and searches",
    )
    profile_cache_ttl_seconds: int = Field(
        default=1800,
        ge=1,
        le=86400,
        description="TTL for molecular profile records",
    )

    # ========================================================================
    # MCP Server Configuration
    # ========================================================================

    mcp_server_name: str = Field(
        default="cbioportal-navigator",
        description="MCP server name",
    )
    tool_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Upper bound on a single tool call, in-flight requests are cancelled",
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="json",
        description="Log format: json or text",
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    # ========================================================================
    # Validators
    # ========================================================================

    @field_validator("cbioportal_url", "cbioportal_api_url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        """Require an http(s) URL and strip any trailing slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL: {v}. Must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of {valid_levels}"
            )
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = {"json", "text"}
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(
                f"Invalid log format: {v}. Must be 'json' or 'text'"
            )
        return v_lower

    # ========================================================================
    # Computed Properties
    # ========================================================================

    @property
    def api_base_url(self) -> str:
        """REST API root, derived from the portal URL unless overridden."""
        return self.cbioportal_api_url or f"{self.cbioportal_url}/api"

    @property
    def effective_log_level(self) -> str:
        """Debug mode forces DEBUG regardless of log_level."""
        return "DEBUG" if self.debug_mode else self.log_level


# Global settings instance
# Loaded once at import time
settings = Settings()
