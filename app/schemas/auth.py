"""Schemas related to account linking."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OAuthCallbackPayload(BaseModel):
    """Payload sent to complete the OAuth callback exchange."""

    code: str = Field(..., description="Authorization code returned by Plant Ranger.")
    state: str = Field(..., description="Opaque state token issued when starting OAuth.")


class ManualTokenRequest(BaseModel):
    """Plant Ranger API token entered by hand for a voice-platform user."""

    token: str = Field(..., min_length=1, description="Plant Ranger API token.")


__all__ = ["ManualTokenRequest", "OAuthCallbackPayload"]
