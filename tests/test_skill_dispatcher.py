try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import pytest
from botocore.exceptions import ClientError

from alexa_skill import speech
from alexa_skill.dispatcher import SkillDispatcher
from app.clients.oauth import OAuthTokenRefreshError
from app.clients.plant_ranger import (
    PlantRangerNotFoundError,
    PlantRangerTimeoutError,
    PlantRangerUnauthorizedError,
    PlantRangerUnavailableError,
)
from app.schemas.plants import HealthReport
from app.services.credentials import AccessTokenResolver
from app.services.plant_status import PlantStatusService


class FakeTokenService:
    def __init__(self, token: str | None = None, error: Exception | None = None) -> None:
        self.token = token
        self.error = error

    async def get_valid_access_token(self, user_id: str) -> str | None:
        if self.error is not None:
            raise self.error
        return self.token


class FakePlantRangerClient:
    def __init__(
        self,
        *,
        health: HealthReport | Exception | None = None,
        teams: list | Exception | None = None,
        team_details: dict | None = None,
        plants: dict | None = None,
    ) -> None:
        self.health = health or HealthReport.from_status("Healthy")
        self.teams = teams if teams is not None else []
        self.team_details = team_details or {}
        self.plants = plants or {}
        self.health_tokens: list = []

    async def check_health(self, access_token=None):
        self.health_tokens.append(access_token)
        if isinstance(self.health, Exception):
            raise self.health
        return self.health

    async def list_teams(self, access_token):
        if isinstance(self.teams, Exception):
            raise self.teams
        return self.teams

    async def get_team(self, access_token, team_id):
        detail = self.team_details[team_id]
        if isinstance(detail, Exception):
            raise detail
        return detail

    async def get_plant(self, access_token, plant_id):
        plant = self.plants.get(plant_id, {})
        if isinstance(plant, Exception):
            raise plant
        return plant


def _dispatcher(api: FakePlantRangerClient, token_service=None, static_token=None):
    resolver = AccessTokenResolver(token_service or FakeTokenService(), static_token=static_token)
    return SkillDispatcher(resolver=resolver, api_client=api, plant_status=PlantStatusService(api))


def _intent(name: str, slots: dict | None = None, access_token: str | None = "linked") -> dict:
    user = {"userId": "amzn1.ask.account.test"}
    if access_token:
        user["accessToken"] = access_token
    return {
        "version": "1.0",
        "session": {"user": user},
        "request": {"type": "IntentRequest", "intent": {"name": name, "slots": slots or {}}},
    }


def _team_slot(value: str) -> dict:
    return {"TeamName": {"name": "TeamName", "value": value}}


TWO_TEAMS = [{"id": 1, "name": "Office"}, {"id": 2, "name": "kitchen"}]
KITCHEN = {
    "plants": [
        {"id": 10, "name": "Basil", "status": "needs_water"},
        {"id": 11, "name": "Mint"},
    ]
}


@pytest.mark.asyncio
async def test_launch_welcomes_and_keeps_session_open() -> None:
    response = await _dispatcher(FakePlantRangerClient()).dispatch(
        {"request": {"type": "LaunchRequest"}, "session": {"user": {"userId": "u"}}}
    )

    assert response.speech.startswith("Welcome to Plant Ranger Check")
    assert response.reprompt
    assert response.should_end_session is False


@pytest.mark.asyncio
async def test_health_without_token_and_unauthorized_prompts_linking() -> None:
    api = FakePlantRangerClient(health=PlantRangerUnauthorizedError("401"))

    response = await _dispatcher(api).dispatch(
        _intent("CheckPlantHealthIntent", access_token=None)
    )

    assert api.health_tokens == [None]
    assert response.card is not None and response.card.type == "LinkAccount"
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_health_report_is_spoken_with_card() -> None:
    response = await _dispatcher(FakePlantRangerClient()).dispatch(
        _intent("CheckPlantHealthIntent")
    )

    assert response.speech.startswith("Your plant health status is: Healthy.")
    assert response.card.type == "Simple"
    assert "Recommendations:" in response.card.content
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_health_service_failure_apologises() -> None:
    api = FakePlantRangerClient(health=PlantRangerUnavailableError("503"))

    response = await _dispatcher(api).dispatch(_intent("CheckPlantHealthIntent"))

    assert response.speech == speech.HEALTH_UNAVAILABLE
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_list_status_requires_a_token() -> None:
    response = await _dispatcher(FakePlantRangerClient()).dispatch(
        _intent("ListPlantStatusIntent", access_token=None)
    )

    assert response.speech == speech.LINK_ACCOUNT_STATUS
    assert response.card.type == "LinkAccount"


@pytest.mark.asyncio
async def test_list_status_uses_stored_token_when_none_embedded() -> None:
    api = FakePlantRangerClient(teams=[TWO_TEAMS[1]], team_details={2: KITCHEN})

    response = await _dispatcher(api, token_service=FakeTokenService("stored")).dispatch(
        _intent("ListPlantStatusIntent", access_token=None)
    )

    assert response.speech == "1 plant needs water: Basil"


@pytest.mark.asyncio
async def test_list_status_skips_team_that_fails() -> None:
    api = FakePlantRangerClient(
        teams=TWO_TEAMS,
        team_details={1: PlantRangerUnavailableError("down"), 2: KITCHEN},
    )

    response = await _dispatcher(api).dispatch(_intent("ListPlantStatusIntent"))

    assert response.speech == "1 plant needs water: Basil"
    assert response.card.content.startswith("Total Plants: 2\nNeeds Water: 1")
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_list_status_all_fine() -> None:
    api = FakePlantRangerClient(
        teams=[TWO_TEAMS[0]], team_details={1: {"plants": [{"id": 5, "name": "Fern"}]}}
    )

    response = await _dispatcher(api).dispatch(_intent("ListPlantStatusIntent"))

    assert response.speech.endswith("All your plants are doing fine!")


@pytest.mark.asyncio
async def test_list_status_without_teams_or_plants() -> None:
    no_teams = await _dispatcher(FakePlantRangerClient(teams=[])).dispatch(
        _intent("ListPlantStatusIntent")
    )
    no_plants = await _dispatcher(
        FakePlantRangerClient(teams=[TWO_TEAMS[0]], team_details={1: {"plants": []}})
    ).dispatch(_intent("ListPlantStatusIntent"))

    assert no_teams.speech == speech.NO_TEAMS
    assert no_plants.speech == speech.NO_PLANTS


@pytest.mark.asyncio
async def test_list_status_failed_refresh_prompts_linking() -> None:
    tokens = FakeTokenService(error=OAuthTokenRefreshError("invalid_grant"))

    response = await _dispatcher(FakePlantRangerClient(), token_service=tokens).dispatch(
        _intent("ListPlantStatusIntent", access_token=None)
    )

    assert response.card.type == "LinkAccount"


@pytest.mark.asyncio
async def test_team_status_missing_slot_asks_for_team() -> None:
    response = await _dispatcher(FakePlantRangerClient(teams=TWO_TEAMS)).dispatch(
        _intent("CheckTeamPlantStatusIntent")
    )

    assert response.speech == speech.ASK_TEAM
    assert response.should_end_session is False


@pytest.mark.asyncio
async def test_team_status_matches_spoken_team_prefix() -> None:
    api = FakePlantRangerClient(teams=TWO_TEAMS, team_details={2: KITCHEN})

    response = await _dispatcher(api).dispatch(
        _intent("CheckTeamPlantStatusIntent", _team_slot("Team Kitchen"))
    )

    assert response.speech == (
        "In kitchen, you have 2 plants. 1 plant needs water: Basil. "
        "1 plant is doing fine: Mint"
    )
    assert response.card.title == "Plant Status - kitchen"
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_team_status_unknown_team_lists_available_teams() -> None:
    response = await _dispatcher(FakePlantRangerClient(teams=TWO_TEAMS)).dispatch(
        _intent("CheckTeamPlantStatusIntent", _team_slot("garage"))
    )

    assert "Office, kitchen" in response.speech
    assert response.should_end_session is False


@pytest.mark.asyncio
async def test_team_status_ambiguous_team_reprompts_with_candidates() -> None:
    teams = [{"id": 1, "name": "Office Upstairs"}, {"id": 2, "name": "Office Downstairs"}]

    response = await _dispatcher(FakePlantRangerClient(teams=teams)).dispatch(
        _intent("CheckTeamPlantStatusIntent", _team_slot("office"))
    )

    assert "Office Upstairs, Office Downstairs" in response.speech
    assert response.should_end_session is False


@pytest.mark.asyncio
async def test_team_status_team_without_plants() -> None:
    api = FakePlantRangerClient(teams=TWO_TEAMS, team_details={1: {"plants": []}})

    response = await _dispatcher(api).dispatch(
        _intent("CheckTeamPlantStatusIntent", _team_slot("office"))
    )

    assert response.speech == "The Office team doesn't have any plants set up yet."


@pytest.mark.asyncio
async def test_fallback_offers_team_names() -> None:
    response = await _dispatcher(FakePlantRangerClient(teams=TWO_TEAMS)).dispatch(
        _intent("AMAZON.FallbackIntent")
    )

    assert "Your teams are: Office, kitchen." in response.speech
    assert response.should_end_session is False


@pytest.mark.asyncio
async def test_fallback_survives_api_errors() -> None:
    api = FakePlantRangerClient(teams=PlantRangerUnavailableError("down"))

    response = await _dispatcher(api).dispatch(_intent("AMAZON.FallbackIntent"))

    assert response.speech == speech.FALLBACK
    assert response.should_end_session is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("intent", "expected", "ends"),
    [
        ("AMAZON.HelpIntent", speech.HELP, False),
        ("AMAZON.StopIntent", speech.GOODBYE, True),
        ("AMAZON.CancelIntent", speech.GOODBYE, True),
        ("SomethingElseIntent", speech.NOT_UNDERSTOOD, True),
    ],
)
async def test_simple_intents(intent: str, expected: str, ends: bool) -> None:
    response = await _dispatcher(FakePlantRangerClient()).dispatch(_intent(intent))

    assert response.speech == expected
    assert response.should_end_session is ends


@pytest.mark.asyncio
async def test_session_ended_has_no_speech() -> None:
    response = await _dispatcher(FakePlantRangerClient()).dispatch(
        {"request": {"type": "SessionEndedRequest", "reason": "USER_INITIATED"}}
    )

    rendered = response.to_alexa()
    assert "outputSpeech" not in rendered["response"]
    assert rendered["response"]["shouldEndSession"] is True


@pytest.mark.asyncio
async def test_unknown_request_type() -> None:
    response = await _dispatcher(FakePlantRangerClient()).dispatch(
        {"request": {"type": "Display.ElementSelected"}}
    )

    assert response.speech == speech.UNSUPPORTED_REQUEST
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_list_status_survives_malformed_plant_entries() -> None:
    api = FakePlantRangerClient(
        teams=TWO_TEAMS,
        team_details={
            1: {"plants": [None, {"id": 11, "name": "Ivy", "status": "needs_water"}]},
            2: {"plants": [{"id": 12, "name": "Aloe", "needsWater": True}]},
        },
    )

    response = await _dispatcher(api).dispatch(_intent("ListPlantStatusIntent"))

    assert response.speech == "2 plants need water: Ivy, Aloe"
    assert response.should_end_session is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [PlantRangerUnavailableError("503"), PlantRangerTimeoutError("slow")]
)
async def test_list_status_team_listing_failure(error: Exception) -> None:
    response = await _dispatcher(FakePlantRangerClient(teams=error)).dispatch(
        _intent("ListPlantStatusIntent")
    )

    assert response.speech == speech.STATUS_UNAVAILABLE
    assert response.should_end_session is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [PlantRangerUnavailableError("503"), PlantRangerTimeoutError("slow")]
)
async def test_team_status_team_listing_failure(error: Exception) -> None:
    response = await _dispatcher(FakePlantRangerClient(teams=error)).dispatch(
        _intent("CheckTeamPlantStatusIntent", _team_slot("kitchen"))
    )

    assert response.speech == speech.TEAM_STATUS_UNAVAILABLE
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_team_status_unauthorized_prompts_linking() -> None:
    api = FakePlantRangerClient(teams=PlantRangerUnauthorizedError("401"))

    response = await _dispatcher(api).dispatch(
        _intent("CheckTeamPlantStatusIntent", _team_slot("kitchen"))
    )

    assert response.card.type == "LinkAccount"
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_team_status_matched_team_gone_names_the_stored_team() -> None:
    api = FakePlantRangerClient(
        teams=TWO_TEAMS, team_details={2: PlantRangerNotFoundError("Team 2 not found")}
    )

    response = await _dispatcher(api).dispatch(
        _intent("CheckTeamPlantStatusIntent", _team_slot("team kitch"))
    )

    assert response.speech == speech.team_missing("kitchen")
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_team_status_all_plant_fetches_fail() -> None:
    api = FakePlantRangerClient(
        teams=TWO_TEAMS,
        team_details={2: {"plants": [{"id": 20, "name": "Sage"}, {"id": 21}]}},
        plants={20: PlantRangerUnavailableError("503"), 21: PlantRangerTimeoutError("slow")},
    )

    response = await _dispatcher(api).dispatch(
        _intent("CheckTeamPlantStatusIntent", _team_slot("kitchen"))
    )

    assert response.speech == speech.team_plants_unavailable("kitchen")
    assert response.should_end_session is True


@pytest.mark.asyncio
async def test_fallback_survives_token_store_errors() -> None:
    tokens = FakeTokenService(
        error=ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
            "PutItem",
        )
    )

    response = await _dispatcher(FakePlantRangerClient(teams=TWO_TEAMS), token_service=tokens).dispatch(
        _intent("AMAZON.FallbackIntent", access_token=None)
    )

    assert response.speech == speech.FALLBACK
    assert response.should_end_session is False
