"""
Domain models for OAuth credentials and token persistence.
"""

from __future__ import annotations

import time
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ACCESS_TOKEN_TYPE = "access"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class OAuthCredentials(BaseModel):
    """OAuth client registration read from Secrets Manager."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    client_id: str = Field(..., alias="clientId")
    client_secret: str = Field(..., alias="clientSecret")
    auth_url: str = Field(..., alias="authUrl")
    token_url: str = Field(..., alias="tokenUrl")
    api_base_url: Optional[str] = Field(None, alias="apiBaseUrl")


class TokenGrant(BaseModel):
    """Token endpoint response for a code exchange or a refresh."""

    access_token: str
    expires_in: int
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"


class StoredToken(BaseModel):
    """Represents a token record stored in the token table."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    token_type: str = Field(ACCESS_TOKEN_TYPE, alias="tokenType")
    token: str
    refresh_token: Optional[str] = Field(None, alias="refreshToken")
    expires_at: int = Field(..., alias="expiresAt", description="Epoch milliseconds.")
    token_type_value: str = Field("Bearer", alias="tokenTypeValue")

    @field_validator("expires_at", mode="before")
    @classmethod
    def _coerce_decimal(cls, value: Any) -> Any:
        # DynamoDB hands numbers back as Decimal.
        if isinstance(value, Decimal):
            return int(value)
        return value

    def is_expired(self, at_ms: int | None = None) -> bool:
        return (now_ms() if at_ms is None else at_ms) >= self.expires_at

    def to_item(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


__all__ = [
    "ACCESS_TOKEN_TYPE",
    "OAuthCredentials",
    "StoredToken",
    "TokenGrant",
    "now_ms",
]
