"""Configuration management for delongify."""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration."""

    # Database settings
    mongodb_uri: str = Field(
        ...,
        description="MongoDB connection URI (required)"
    )

    mongodb_database: str = Field(
        default="dlgfy",
        description="Database holding the slug mappings"
    )

    mongodb_collection: str = Field(
        default="slug-url-pairs",
        description="Collection of slug mappings"
    )

    mongodb_timeout_ms: int = Field(
        default=5000,
        ge=1,
        description="Server selection timeout in milliseconds"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8000,
        description="Port to listen on"
    )

    # Slug settings
    slug_length: int = Field(
        default=5,
        ge=1,
        description="Length of generated slugs"
    )

    slug_max_attempts: int = Field(
        default=100,
        ge=1,
        description="Slug candidates tried before a creation request fails"
    )

    slug_ttl_seconds: int = Field(
        default=5 * 24 * 60 * 60,
        ge=1,
        description="How long a slug stays valid (default 5 days)"
    )

    default_scheme: Literal["http", "https"] = Field(
        default="https",
        description="Scheme given to URLs submitted without http or https"
    )

    # Liveness check
    check_url_liveness: bool = Field(
        default=False,
        description="GET submitted URLs and reject those that do not answer"
    )

    liveness_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for the liveness GET"
    )

    # Rate limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable per-client rate limiting"
    )

    rate_limit_per_minute: int = Field(
        default=5,
        ge=1,
        description="Requests allowed per client in a moving one-minute window"
    )

    rate_limit_storage_uri: str = Field(
        default="memory://",
        description="Storage for rate limit counters (memory:// or redis://...)"
    )

    trusted_proxy_count: int = Field(
        default=0,
        ge=0,
        description="Reverse proxies in front of the service that append to X-Forwarded-For"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def rate_limit(self) -> str:
        """Rate limit in the string notation understood by slowapi."""
        return f"{self.rate_limit_per_minute}/minute"


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
