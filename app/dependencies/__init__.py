"""Expose dependency helpers for FastAPI routers and the Lambda handler."""

from .clients import (
    get_access_token_resolver,
    get_app_settings,
    get_oauth_client,
    get_oauth_credentials_provider,
    get_oauth_state_encoder,
    get_oauth_token_service,
    get_plant_ranger_client,
    get_plant_status_service,
    get_skill_dispatcher,
    get_token_cipher_service,
    get_token_store,
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
