"""
Application configuration models and helpers.

Centralizes settings management so both the Lambda skill handler and the
self-hosted FastAPI endpoint share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class _Settings(BaseSettings):
    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")


class PlantRangerSettings(_Settings):
    """Connection details for the remote Plant Ranger API."""

    api_base_url: str = Field(
        "https://api.plantranger.com", validation_alias="PLANT_RANGER_API_BASE_URL"
    )
    api_token: Optional[str] = Field(
        None,
        validation_alias="PLANT_RANGER_API_TOKEN",
        description="Static fallback token for single-user deployments.",
    )
    timeout_seconds: float = Field(10.0, validation_alias="PLANT_RANGER_API_TIMEOUT")

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class AWSSettings(_Settings):
    """Settings for AWS services used by the skill."""

    region_name: str = Field("us-east-1", validation_alias="AWS_REGION")
    oauth_tokens_table: str = Field(
        "plant-ranger-oauth-tokens", validation_alias="OAUTH_TOKENS_TABLE"
    )
    oauth_secrets_name: str = Field(
        "plant-ranger-oauth-credentials", validation_alias="OAUTH_SECRETS_NAME"
    )


class TokenStoreSettings(_Settings):
    """Where account-linking tokens are persisted."""

    backend: Literal["dynamodb", "sqlite"] = Field(
        "dynamodb", validation_alias="TOKEN_STORE_BACKEND"
    )
    sqlite_path: str = Field(
        "data/plant_ranger_tokens.db",
        validation_alias="TOKEN_STORE_SQLITE_PATH",
        description="Only used by the sqlite backend for local development.",
    )


class SecuritySettings(_Settings):
    """Security-related configuration."""

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting stored tokens."
        ),
    )
    state_secret: Optional[str] = Field(
        None,
        validation_alias="OAUTH_STATE_SECRET",
        description="HMAC key for OAuth state values. Defaults to the client secret.",
    )
    admin_api_key: Optional[str] = Field(
        None,
        validation_alias="ADMIN_API_KEY",
        description="Required for manual token entry; the route is disabled without it.",
    )


class OAuthSettings(_Settings):
    """Account-linking flow configuration."""

    redirect_uri: str = Field(
        "https://localhost:8000/api/auth/callback", validation_alias="OAUTH_REDIRECT_URI"
    )
    state_ttl_seconds: int = Field(900, validation_alias="OAUTH_STATE_TTL")
    raw_scopes: str = Field(
        "read:plants",
        validation_alias="OAUTH_SCOPES",
        description="Comma-separated scopes requested during account linking.",
    )

    @property
    def scopes(self) -> tuple[str, ...]:
        return tuple(
            scope.strip() for scope in self.raw_scopes.split(",") if scope.strip()
        )


class AppSettings(_Settings):
    """Root settings object shared by the Lambda handler and the API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    plant_ranger: PlantRangerSettings = Field(default_factory=PlantRangerSettings)
    aws: AWSSettings = Field(default_factory=AWSSettings)
    token_store: TokenStoreSettings = Field(default_factory=TokenStoreSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "AWSSettings",
    "OAuthSettings",
    "PlantRangerSettings",
    "SecuritySettings",
    "TokenStoreSettings",
    "get_settings",
]
