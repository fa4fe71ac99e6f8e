"""
Factory functions providing shared clients and services.

Each factory is cached so a process (a warm Lambda container or the API
server) builds its boto3 clients and OAuth credentials provider exactly once.
The same factories double as FastAPI dependencies.
"""

from functools import lru_cache

from alexa_skill.dispatcher import SkillDispatcher
from app.clients import (
    DynamoDBClient,
    OAuthCredentialsProvider,
    OAuthStateEncoder,
    PlantRangerClient,
    PlantRangerOAuthClient,
    SecretsManagerClient,
    SQLiteStore,
)
from app.core.config import AppSettings, get_settings
from app.services import (
    AccessTokenResolver,
    OAuthTokenService,
    PlantStatusService,
    TokenCipherService,
    TokenStore,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning application settings."""
    return _settings()


@lru_cache()
def get_oauth_credentials_provider() -> OAuthCredentialsProvider:
    """Provide the process-wide OAuth credentials provider."""
    settings = _settings()
    return OAuthCredentialsProvider(
        SecretsManagerClient(settings.aws),
        secret_name=settings.aws.oauth_secrets_name,
    )


@lru_cache()
def get_oauth_client() -> PlantRangerOAuthClient:
    """Create a singleton Plant Ranger OAuth client."""
    return PlantRangerOAuthClient(get_oauth_credentials_provider(), _settings().oauth)


@lru_cache()
def get_oauth_state_encoder() -> OAuthStateEncoder:
    """Provide an OAuth state encoder, keyed by the client secret unless overridden."""
    settings = _settings()
    secret = settings.security.state_secret or get_oauth_credentials_provider().get().client_secret
    return OAuthStateEncoder(secret_key=secret)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService | None:
    """Provide symmetric encryption for stored tokens when a secret is configured."""
    secret = _settings().security.token_encryption_secret
    if not secret:
        return None
    return TokenCipherService(secret=secret)


@lru_cache()
def get_token_store() -> TokenStore:
    """Provide the token store on the configured backend."""
    settings = _settings()
    if settings.token_store.backend == "sqlite":
        backend = SQLiteStore(settings.token_store.sqlite_path)
    else:
        backend = DynamoDBClient(settings.aws)
    return TokenStore(backend, token_cipher=get_token_cipher_service())


@lru_cache()
def get_oauth_token_service() -> OAuthTokenService:
    """Provide helper for managing stored OAuth tokens."""
    return OAuthTokenService(token_store=get_token_store(), oauth_client=get_oauth_client())


@lru_cache()
def get_plant_ranger_client() -> PlantRangerClient:
    """Provide the Plant Ranger API client."""
    return PlantRangerClient(_settings().plant_ranger)


@lru_cache()
def get_access_token_resolver() -> AccessTokenResolver:
    return AccessTokenResolver(
        token_service=get_oauth_token_service(),
        static_token=_settings().plant_ranger.api_token,
    )


@lru_cache()
def get_plant_status_service() -> PlantStatusService:
    return PlantStatusService(get_plant_ranger_client())


@lru_cache()
def get_skill_dispatcher() -> SkillDispatcher:
    """Provide the intent dispatcher shared by Lambda and the HTTPS endpoint."""
    return SkillDispatcher(
        resolver=get_access_token_resolver(),
        api_client=get_plant_ranger_client(),
        plant_status=get_plant_status_service(),
    )


__all__ = [
    "get_access_token_resolver",
    "get_app_settings",
    "get_oauth_client",
    "get_oauth_credentials_provider",
    "get_oauth_state_encoder",
    "get_oauth_token_service",
    "get_plant_ranger_client",
    "get_plant_status_service",
    "get_skill_dispatcher",
    "get_token_cipher_service",
    "get_token_store",
]
