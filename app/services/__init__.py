"""Service layer exports."""

from .credentials import AccessTokenResolver
from .oauth_tokens import OAuthTokenService
from .plant_status import PlantStatusService, PlantWateringStatus, WateringReport
from .team_matching import TeamMatch, match_team
from .token_cipher import TokenCipherService
from .token_store import TokenStore

__all__ = [
    "AccessTokenResolver",
    "OAuthTokenService",
    "PlantStatusService",
    "PlantWateringStatus",
    "TeamMatch",
    "TokenCipherService",
    "TokenStore",
    "WateringReport",
    "match_team",
]
