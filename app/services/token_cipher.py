"""Symmetric encryption for token values stored at rest."""

from __future__ import annotations

import base64
import hashlib
from typing import Any, Dict, Iterable

from cryptography.fernet import Fernet, InvalidToken

ENCRYPTED_MARKER = "encrypted"


class TokenCipherService:
    """Encrypt and decrypt token fields of a stored record with a derived Fernet key."""

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        self._fernet = Fernet(base64.urlsafe_b64encode(digest))

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError(
                "Failed to decrypt token; invalid ciphertext provided."
            ) from exc
        return plaintext.decode("utf-8")

    def seal(self, item: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
        """Return a copy of ``item`` with ``fields`` encrypted and the marker set."""
        sealed = dict(item)
        for field in fields:
            if sealed.get(field):
                sealed[field] = self.encrypt(sealed[field])
        sealed[ENCRYPTED_MARKER] = True
        return sealed

    def unseal(self, item: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
        """Reverse :meth:`seal`. Records written in plaintext pass through."""
        opened = dict(item)
        if not opened.pop(ENCRYPTED_MARKER, False):
            return opened
        for field in fields:
            if opened.get(field):
                opened[field] = self.decrypt(opened[field])
        return opened


__all__ = ["ENCRYPTED_MARKER", "TokenCipherService"]
