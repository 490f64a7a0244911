"""
Client settings and configuration management.

Credentials and endpoint details come from environment variables (or a .env
file) and are validated once on load using pydantic-settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    SellerCenter client settings loaded from environment variables.

    The API key is stored as SecretStr so it never ends up in a log line.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Credentials
    endpoint: str = Field(..., alias="SELLER_CENTER_ENDPOINT")
    username: str = Field(..., alias="SELLER_CENTER_USERNAME")
    api_key: SecretStr = Field(..., alias="SELLER_CENTER_API_KEY")
    version: str = Field(default="1.0", alias="SELLER_CENTER_VERSION")

    # Transport
    request_timeout_seconds: float = Field(default=30.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )
    log_json: bool = Field(default=True, alias="LOG_JSON")

    @field_validator("endpoint", mode="before")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        if not isinstance(v, str) or not v.startswith(("http://", "https://")):
            raise ValueError("Endpoint must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username must not be empty")
        return v.strip()


@lru_cache
def get_settings() -> Settings:
    """Get cached client settings."""
    return Settings()
