"""
AWS Secrets Manager access for the OAuth client registration.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import boto3

from app.core.config import AWSSettings
from app.models.oauth import OAuthCredentials

logger = logging.getLogger(__name__)


class SecretsManagerClient:
    """Read JSON-encoded secret strings."""

    def __init__(self, settings: AWSSettings) -> None:
        self._settings = settings
        self._client = boto3.client("secretsmanager", region_name=settings.region_name)

    def get_json(self, secret_id: str) -> Dict[str, Any]:
        """Fetch and decode a secret. An empty secret decodes to ``{}``."""
        response = self._client.get_secret_value(SecretId=secret_id)
        return json.loads(response.get("SecretString") or "{}")


class OAuthCredentialsProvider:
    """Load the OAuth credentials secret once and hand out the cached copy.

    One provider is built per process (see ``app.dependencies``), so the
    secret is read at most once for the lifetime of a warm Lambda container.
    """

    def __init__(self, secrets_client: SecretsManagerClient, secret_name: str) -> None:
        self._secrets = secrets_client
        self._secret_name = secret_name
        self._credentials: Optional[OAuthCredentials] = None

    def get(self) -> OAuthCredentials:
        if self._credentials is None:
            logger.info("Loading OAuth credentials from secret %s", self._secret_name)
            self._credentials = OAuthCredentials.model_validate(
                self._secrets.get_json(self._secret_name)
            )
        return self._credentials


__all__ = ["OAuthCredentialsProvider", "SecretsManagerClient"]
