"""
Access-token resolution for skill requests.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.services.oauth_tokens import OAuthTokenService

logger = logging.getLogger(__name__)


class AccessTokenResolver:
    """Pick the Plant Ranger token to use for a request.

    Sources are tried in order: the token the voice platform embedded in the
    request (platform-hosted account linking), the token stored for the user
    (refreshed when expired), then the static token from configuration.
    A failed refresh raises ``OAuthTokenRefreshError`` instead of falling
    through to the static token, so the user is asked to re-link.
    """

    def __init__(self, token_service: OAuthTokenService, static_token: Optional[str] = None) -> None:
        self._tokens = token_service
        self._static_token = static_token

    async def resolve(self, *, user_id: str, embedded_token: Optional[str]) -> Optional[str]:
        if embedded_token:
            logger.info("Using access token embedded in the request")
            return embedded_token

        logger.info("No token in request, checking the token store for user %s", user_id)
        stored = await self._tokens.get_valid_access_token(user_id)
        if stored:
            return stored

        if self._static_token:
            logger.info("Using static API token from configuration")
            return self._static_token

        return None


__all__ = ["AccessTokenResolver"]
