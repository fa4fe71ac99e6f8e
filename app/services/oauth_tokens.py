"""
Helpers for retrieving, refreshing and recording Plant Ranger OAuth tokens.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from app.clients.oauth import OAuthTokenRefreshError, PlantRangerOAuthClient
from app.models.oauth import ACCESS_TOKEN_TYPE, StoredToken, TokenGrant, now_ms
from app.services.token_store import TokenStore

logger = logging.getLogger(__name__)


class OAuthTokenService:
    """Manages access to persisted account-linking tokens."""

    # Hand-entered API tokens normally never expire; a year keeps them usable.
    _MANUAL_TOKEN_LIFETIME = timedelta(days=365)

    def __init__(self, token_store: TokenStore, oauth_client: PlantRangerOAuthClient) -> None:
        self._store = token_store
        self._oauth = oauth_client

    def get_tokens(self, user_id: str) -> Optional[StoredToken]:
        return self._store.get(user_id, ACCESS_TOKEN_TYPE)

    async def ensure_valid_tokens(self, user_id: str, tokens: StoredToken) -> StoredToken:
        """Return ``tokens`` untouched, or a refreshed and persisted copy once expired."""
        if not tokens.is_expired():
            return tokens

        logger.info("Access token for user %s expired, refreshing", user_id)
        if not tokens.refresh_token:
            raise OAuthTokenRefreshError("No refresh token available")

        refreshed_at = now_ms()
        grant = await self._oauth.refresh_token(tokens.refresh_token)
        refreshed = StoredToken(
            user_id=user_id,
            token_type=ACCESS_TOKEN_TYPE,
            token=grant.access_token,
            refresh_token=grant.refresh_token or tokens.refresh_token,
            expires_at=refreshed_at + grant.expires_in * 1000,
            token_type_value=grant.token_type,
        )
        self._store.put(refreshed)
        return refreshed

    async def get_valid_access_token(self, user_id: str) -> Optional[str]:
        """Stored access token for ``user_id`` (refreshed when needed), if any."""
        tokens = self.get_tokens(user_id)
        if tokens is None:
            return None
        valid = await self.ensure_valid_tokens(user_id, tokens)
        return valid.token

    def store_grant(self, user_id: str, grant: TokenGrant) -> StoredToken:
        """Persist the result of an authorization-code exchange."""
        record = StoredToken(
            user_id=user_id,
            token=grant.access_token,
            refresh_token=grant.refresh_token,
            expires_at=now_ms() + grant.expires_in * 1000,
            token_type_value=grant.token_type,
        )
        self._store.put(record)
        return record

    def store_token(self, user_id: str, token: str) -> StoredToken:
        """Persist a token entered by hand."""
        lifetime_ms = int(self._MANUAL_TOKEN_LIFETIME.total_seconds() * 1000)
        record = StoredToken(
            user_id=user_id,
            token=token,
            expires_at=now_ms() + lifetime_ms,
            token_type_value="Bearer",
        )
        self._store.put(record)
        return record


__all__ = ["OAuthTokenService"]
