"""
Route Alexa requests to intent handlers and shape their responses.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from alexa_skill import speech
from alexa_skill.models import (
    INTENT_REQUEST,
    LAUNCH_REQUEST,
    SESSION_ENDED_REQUEST,
    SkillRequest,
)
from alexa_skill.responses import (
    SkillResponse,
    ask,
    link_account_card,
    simple_card,
    tell,
)
from app.clients.oauth import OAuthTokenRefreshError
from app.clients.plant_ranger import (
    PlantRangerAPIError,
    PlantRangerClient,
    PlantRangerNotFoundError,
    PlantRangerUnauthorizedError,
)
from app.services.credentials import AccessTokenResolver
from app.services.plant_status import PlantStatusService
from app.services.team_matching import match_team, team_display_name

logger = logging.getLogger(__name__)

TEAM_NAME_SLOT = "TeamName"

# Raised when the user has to (re-)link the Plant Ranger account.
_RELINK_ERRORS = (PlantRangerUnauthorizedError, OAuthTokenRefreshError)

IntentHandler = Callable[[SkillRequest], Awaitable[SkillResponse]]


def _link_account(text: str) -> SkillResponse:
    return tell(text, card=link_account_card())


class SkillDispatcher:
    """State-free mapping from one skill request to one response."""

    def __init__(
        self,
        resolver: AccessTokenResolver,
        api_client: PlantRangerClient,
        plant_status: PlantStatusService,
    ) -> None:
        self._resolver = resolver
        self._api = api_client
        self._plant_status = plant_status
        self._intent_handlers: Dict[str, IntentHandler] = {
            "CheckPlantHealthIntent": self._check_plant_health,
            "ListPlantStatusIntent": self._list_plant_status,
            "CheckTeamPlantStatusIntent": self._check_team_plant_status,
            "AMAZON.FallbackIntent": self._fallback,
            "AMAZON.HelpIntent": self._help,
            "AMAZON.StopIntent": self._stop,
            "AMAZON.CancelIntent": self._stop,
        }

    async def dispatch(self, envelope: Mapping[str, Any]) -> SkillResponse:
        request = SkillRequest.from_envelope(envelope)

        if request.request_type == LAUNCH_REQUEST:
            return ask(speech.WELCOME, speech.WELCOME_REPROMPT)

        if request.request_type == INTENT_REQUEST:
            logger.info("Intent received: %s, slots: %s", request.intent_name, request.slots)
            handler = self._intent_handlers.get(request.intent_name or "")
            if handler is None:
                logger.warning("Unsupported intent %s", request.intent_name)
                return tell(speech.NOT_UNDERSTOOD)
            return await handler(request)

        if request.request_type == SESSION_ENDED_REQUEST:
            logger.info("Session ended: %s %s", request.reason, request.error or "")
            return SkillResponse(should_end_session=True)

        logger.warning("Unknown request type %r", request.request_type)
        return tell(speech.UNSUPPORTED_REQUEST)

    async def _resolve_token(self, request: SkillRequest) -> Optional[str]:
        return await self._resolver.resolve(
            user_id=request.user_id, embedded_token=request.access_token
        )

    async def _check_plant_health(self, request: SkillRequest) -> SkillResponse:
        try:
            access_token = await self._resolve_token(request)
            if access_token is None:
                logger.info("No token available, calling health endpoint unauthenticated")
            report = await self._api.check_health(access_token)
        except _RELINK_ERRORS as exc:
            logger.info("Account linking required for health check: %s", exc)
            return _link_account(speech.LINK_ACCOUNT_HEALTH)
        except PlantRangerAPIError as exc:
            logger.error("Error checking plant health: %s", exc)
            return tell(speech.HEALTH_UNAVAILABLE)

        return tell(
            speech.health_speech(report),
            card=simple_card(speech.HEALTH_CARD_TITLE, speech.health_card_content(report)),
        )

    async def _list_plant_status(self, request: SkillRequest) -> SkillResponse:
        try:
            access_token = await self._resolve_token(request)
            if access_token is None:
                return _link_account(speech.LINK_ACCOUNT_STATUS)

            teams = await self._api.list_teams(access_token)
            if not teams:
                return tell(speech.NO_TEAMS)

            report = await self._plant_status.all_teams_report(access_token, teams)
        except _RELINK_ERRORS as exc:
            logger.info("Account linking required for plant status: %s", exc)
            return _link_account(speech.LINK_ACCOUNT_STATUS)
        except PlantRangerAPIError as exc:
            logger.error("Error listing plant status: %s", exc)
            return tell(speech.STATUS_UNAVAILABLE)

        if not report.plants:
            return tell(speech.NO_PLANTS)
        return tell(
            speech.all_plants_speech(report),
            card=simple_card(speech.STATUS_CARD_TITLE, speech.watering_card_content(report)),
        )

    async def _check_team_plant_status(self, request: SkillRequest) -> SkillResponse:
        spoken_team = request.slot_value(TEAM_NAME_SLOT)
        logger.info("Extracted team name: %r", spoken_team)

        team_name: Optional[str] = None
        try:
            access_token = await self._resolve_token(request)
            if access_token is None:
                return _link_account(speech.LINK_ACCOUNT_STATUS)

            if not spoken_team or not spoken_team.strip():
                return ask(speech.ASK_TEAM, speech.ASK_TEAM_REPROMPT)

            teams = await self._api.list_teams(access_token)
            if not teams:
                return tell(speech.NO_TEAMS)

            match = match_team(teams, spoken_team)
            if match.team is None:
                if match.ambiguous:
                    names = [team_display_name(team) for team in match.candidates]
                    return ask(*speech.team_ambiguous(spoken_team, names))
                names = [team_display_name(team) for team in teams]
                return ask(*speech.team_not_found(spoken_team, names))

            team_name = team_display_name(match.team)
            report = await self._plant_status.team_report(access_token, match.team)
        except _RELINK_ERRORS as exc:
            logger.info("Account linking required for team status: %s", exc)
            return _link_account(speech.LINK_ACCOUNT_STATUS)
        except PlantRangerNotFoundError as exc:
            if team_name is None:
                logger.error("Error listing teams: %s", exc)
                return tell(speech.TEAM_STATUS_UNAVAILABLE)
            logger.warning("Matched team disappeared: %s", exc)
            return tell(speech.team_missing(team_name))
        except PlantRangerAPIError as exc:
            logger.error("Error checking team plant status: %s", exc)
            return tell(speech.TEAM_STATUS_UNAVAILABLE)

        if not report.plants:
            if report.skipped:
                return tell(speech.team_plants_unavailable(team_name))
            return tell(speech.team_without_plants(team_name))
        return tell(
            speech.team_speech(team_name, report),
            card=simple_card(
                speech.team_card_title(team_name), speech.watering_card_content(report)
            ),
        )

    async def _fallback(self, request: SkillRequest) -> SkillResponse:
        """Best effort: offer the user's team names when they can be listed."""
        try:
            access_token = await self._resolve_token(request)
            if access_token:
                teams = await self._api.list_teams(access_token)
                if teams:
                    names = [team_display_name(team) for team in teams]
                    return ask(*speech.fallback_with_teams(names))
        except Exception:
            logger.exception("Error getting teams in fallback intent")
        return ask(speech.FALLBACK, speech.FALLBACK_REPROMPT)

    async def _help(self, request: SkillRequest) -> SkillResponse:
        return ask(speech.HELP, speech.HELP_REPROMPT)

    async def _stop(self, request: SkillRequest) -> SkillResponse:
        return tell(speech.GOODBYE)


__all__ = ["SkillDispatcher", "TEAM_NAME_SLOT"]
