"""
Token record persistence on top of DynamoDB or the local sqlite substitute.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from app.models.oauth import ACCESS_TOKEN_TYPE, StoredToken
from app.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)

_SECRET_FIELDS = ("token", "refreshToken")


class RecordBackend(Protocol):
    def get_item(self, *, user_id: str, token_type: str) -> Optional[Dict[str, Any]]: ...

    def put_item(self, item: Dict[str, Any]) -> None: ...


class TokenStore:
    """Get/put token records keyed by user identity and token kind."""

    def __init__(
        self,
        backend: RecordBackend,
        token_cipher: TokenCipherService | None = None,
    ) -> None:
        self._backend = backend
        self._cipher = token_cipher

    def get(self, user_id: str, token_type: str = ACCESS_TOKEN_TYPE) -> Optional[StoredToken]:
        """Return the stored record, or ``None`` when missing or unreadable."""
        try:
            item = self._backend.get_item(user_id=user_id, token_type=token_type)
        except (BotoCoreError, ClientError, sqlite3.Error):
            logger.exception("Error reading tokens for user %s", user_id)
            return None
        if not item:
            return None

        try:
            if self._cipher is not None:
                item = self._cipher.unseal(item, _SECRET_FIELDS)
            return StoredToken.model_validate(item)
        except ValueError:
            logger.exception("Stored token record for user %s is unusable", user_id)
            return None

    def put(self, token: StoredToken) -> None:
        item = token.to_item()
        if self._cipher is not None:
            item = self._cipher.seal(item, _SECRET_FIELDS)
        self._backend.put_item(item)


__all__ = ["RecordBackend", "TokenStore"]
