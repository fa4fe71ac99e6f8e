"""Expose constructed client wrappers."""

from .dynamodb import DynamoDBClient
from .oauth import OAuthStateEncoder, PlantRangerOAuthClient
from .plant_ranger import PlantRangerClient
from .secrets import OAuthCredentialsProvider, SecretsManagerClient
from .sqlite_store import SQLiteStore

__all__ = [
    "DynamoDBClient",
    "OAuthCredentialsProvider",
    "OAuthStateEncoder",
    "PlantRangerClient",
    "PlantRangerOAuthClient",
    "SQLiteStore",
    "SecretsManagerClient",
]
