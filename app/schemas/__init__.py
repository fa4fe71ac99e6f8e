"""Public schema exports."""

from .auth import ManualTokenRequest, OAuthCallbackPayload
from .plants import HealthReport

__all__ = [
    "HealthReport",
    "ManualTokenRequest",
    "OAuthCallbackPayload",
]
