"""EMQX client settings.

Settings can be provided via:
1. Environment variables (CELINE_EMQX_*) or a .env file
2. CLI arguments (--base-url, --api-key, etc.)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmqxSettings(BaseSettings):
    """EMQX connection and authentication settings."""

    model_config = SettingsConfigDict(
        env_prefix="CELINE_EMQX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Connection
    base_url: str | None = Field(
        default=None,
        description="EMQX management API base URL, e.g. http://localhost:18083/api/v5",
    )
    timeout: float | None = Field(
        default=None,
        description="HTTP request timeout in seconds (httpx default if unset)",
    )

    # Basic authentication (API key)
    api_key: str | None = Field(default=None, description="EMQX API key")
    api_secret: str | None = Field(default=None, description="EMQX API secret")

    # Bearer authentication
    token: str | None = Field(default=None, description="Bearer token (JWT)")

    log_level: str = Field(default="INFO", description="Logging level")

    @property
    def has_basic_credentials(self) -> bool:
        """Check if API key credentials are available."""
        return bool(self.api_key and self.api_secret)

    @property
    def has_token(self) -> bool:
        """Check if a bearer token is available."""
        return bool(self.token)

    def with_overrides(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
    ) -> "EmqxSettings":
        """Create a new settings instance with CLI overrides applied."""
        return self.model_copy(
            update={
                "base_url": base_url or self.base_url,
                "api_key": api_key or self.api_key,
                "api_secret": api_secret or self.api_secret,
                "token": token or self.token,
                "timeout": timeout if timeout is not None else self.timeout,
            }
        )
