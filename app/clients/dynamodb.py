"""
Utility wrapper for storing account-linking tokens in DynamoDB.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import boto3

from app.core.config import AWSSettings


class DynamoDBClient:
    """Get/put token records keyed by ``(userId, tokenType)``."""

    def __init__(self, settings: AWSSettings) -> None:
        self._settings = settings
        self._resource = boto3.resource("dynamodb", region_name=settings.region_name)
        self._table = self._resource.Table(settings.oauth_tokens_table)

    def put_item(self, item: Dict[str, Any]) -> None:
        """Put an item in the DynamoDB table."""
        self._table.put_item(Item=item)

    def get_item(self, *, user_id: str, token_type: str) -> Optional[Dict[str, Any]]:
        """Retrieve an item using its key."""
        response = self._table.get_item(Key={"userId": user_id, "tokenType": token_type})
        return response.get("Item")


__all__ = ["DynamoDBClient"]
