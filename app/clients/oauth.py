"""
Plant Ranger OAuth utilities.

These helpers drive account linking and the access-token refresh lifecycle.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import json
import logging
from hashlib import sha256
from typing import Any, Dict
from urllib.parse import urlencode

import httpx
from fastapi import HTTPException, status
from pydantic import ValidationError

from app.clients.secrets import OAuthCredentialsProvider
from app.core.config import OAuthSettings
from app.models.oauth import TokenGrant

logger = logging.getLogger(__name__)


class OAuthStateEncoder:
    """Encode and decode OAuth state values to guard against tampering."""

    def __init__(self, secret_key: str) -> None:
        self._secret_key = secret_key.encode("utf-8")

    def encode(self, payload: Dict[str, Any]) -> str:
        serialized = json.dumps(payload, separators=(",", ":"), sort_keys=True)
        signature = hmac.new(self._secret_key, serialized.encode("utf-8"), sha256).digest()
        return base64.urlsafe_b64encode(signature + serialized.encode("utf-8")).decode("utf-8")

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            decoded = base64.urlsafe_b64decode(token.encode("utf-8"))
        except (binascii.Error, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Malformed OAuth state.",
            ) from exc
        signature, serialized = decoded[:32], decoded[32:]
        expected_signature = hmac.new(self._secret_key, serialized, sha256).digest()
        if not hmac.compare_digest(signature, expected_signature):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid OAuth state signature.",
            )
        return json.loads(serialized)


class OAuthTokenExchangeError(Exception):
    """Raised when the token endpoint rejects an authorization code."""


class OAuthTokenRefreshError(Exception):
    """Raised when an expired access token cannot be refreshed."""


class PlantRangerOAuthClient:
    """Build authorization URLs, exchange codes and refresh access tokens."""

    _TIMEOUT_SECONDS = 10.0

    def __init__(
        self,
        credentials_provider: OAuthCredentialsProvider,
        oauth_settings: OAuthSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials_provider
        self._oauth = oauth_settings
        self._transport = transport

    def build_authorization_url(self, state: str) -> str:
        """Construct the Plant Ranger consent URL."""
        credentials = self._credentials.get()
        params = {
            "response_type": "code",
            "client_id": credentials.client_id,
            "redirect_uri": self._oauth.redirect_uri,
            "scope": " ".join(self._oauth.scopes),
            "state": state,
        }
        return f"{credentials.auth_url}?{urlencode(params)}"

    async def exchange_authorization_code(self, code: str) -> TokenGrant:
        """Exchange an authorization code for tokens."""
        credentials = self._credentials.get()
        payload = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "redirect_uri": self._oauth.redirect_uri,
        }
        try:
            response = await self._post_form(credentials.token_url, payload)
        except httpx.HTTPError as exc:
            raise OAuthTokenExchangeError(f"Token endpoint unreachable: {exc}") from exc

        if response.status_code != status.HTTP_200_OK:
            raise OAuthTokenExchangeError(response.text)
        try:
            return TokenGrant.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise OAuthTokenExchangeError("Incomplete token payload returned.") from exc

    async def refresh_token(self, refresh_token: str) -> TokenGrant:
        """Refresh the access token using a stored refresh token."""
        credentials = self._credentials.get()
        payload = {
            "grant_type": "refresh_token",
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "refresh_token": refresh_token,
        }
        try:
            response = await self._post_form(credentials.token_url, payload)
        except httpx.HTTPError as exc:
            raise OAuthTokenRefreshError(f"Token endpoint unreachable: {exc}") from exc

        if response.status_code != status.HTTP_200_OK:
            logger.warning("Token refresh rejected with HTTP %s", response.status_code)
            raise OAuthTokenRefreshError(response.text)
        try:
            return TokenGrant.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise OAuthTokenRefreshError("Incomplete refresh payload returned.") from exc

    async def _post_form(self, url: str, payload: Dict[str, str]) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._TIMEOUT_SECONDS, transport=self._transport
        ) as client:
            return await client.post(url, data=payload)


__all__ = [
    "OAuthStateEncoder",
    "OAuthTokenExchangeError",
    "OAuthTokenRefreshError",
    "PlantRangerOAuthClient",
]
