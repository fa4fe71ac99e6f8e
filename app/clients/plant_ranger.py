"""
Async client for the Plant Ranger REST API.

Failures map onto a small exception hierarchy so callers can tell
"link your account" apart from "try again later".
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import PlantRangerSettings
from app.schemas.plants import HealthReport

logger = logging.getLogger(__name__)


class PlantRangerAPIError(Exception):
    """Generic failure talking to the Plant Ranger API."""


class PlantRangerUnauthorizedError(PlantRangerAPIError):
    """The API rejected the credentials (HTTP 401/403)."""


class PlantRangerNotFoundError(PlantRangerAPIError):
    """The requested team or plant does not exist (HTTP 404)."""


class PlantRangerUnavailableError(PlantRangerAPIError):
    """The API answered with a server error (HTTP 5xx)."""


class PlantRangerTimeoutError(PlantRangerAPIError):
    """The API did not answer within the configured timeout."""


class PlantRangerClient:
    """Thin wrapper over the health, team and plant endpoints."""

    def __init__(
        self,
        settings: PlantRangerSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = settings.api_base_url
        self._timeout = settings.timeout_seconds
        self._transport = transport

    async def check_health(self, access_token: Optional[str] = None) -> HealthReport:
        """Call ``/health`` and translate its status into a report."""
        payload = await self._get("/health", access_token=access_token, resource="plant health")
        status = (payload.get("status") if isinstance(payload, dict) else None) or "Unknown"
        logger.info("Plant health status reported as %s", status)
        return HealthReport.from_status(str(status))

    async def list_teams(self, access_token: str) -> List[Dict[str, Any]]:
        """Teams visible to the token; entries that are not objects are dropped."""
        payload = await self._get("/v1/teams", access_token=access_token, resource="teams")
        if isinstance(payload, dict):
            payload = payload.get("teams")
        if not isinstance(payload, list):
            return []
        return [team for team in payload if isinstance(team, dict)]

    async def get_team(self, access_token: str, team_id: Any) -> Dict[str, Any]:
        return await self._get(
            f"/v1/teams/{team_id}", access_token=access_token, resource=f"team {team_id}"
        )

    async def get_plant(self, access_token: str, plant_id: Any) -> Dict[str, Any]:
        return await self._get(
            f"/v1/plants/{plant_id}", access_token=access_token, resource=f"plant {plant_id}"
        )

    async def _get(
        self, path: str, *, access_token: Optional[str], resource: str
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(f"{self._base_url}{path}", headers=headers)
        except httpx.TimeoutException as exc:
            raise PlantRangerTimeoutError(
                f"Request timeout while retrieving {resource}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PlantRangerAPIError(f"Failed to retrieve {resource}: {exc}") from exc

        logger.debug("GET %s -> HTTP %s", path, response.status_code)
        self._raise_for_status(response, resource)
        try:
            return response.json()
        except ValueError as exc:
            raise PlantRangerAPIError(f"Invalid JSON returned for {resource}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response, resource: str) -> None:
        code = response.status_code
        if code < 400:
            return
        if code in (401, 403):
            raise PlantRangerUnauthorizedError(
                f"Unauthorized while retrieving {resource} - please link your account"
            )
        if code == 404:
            raise PlantRangerNotFoundError(f"{resource.capitalize()} not found")
        if code >= 500:
            raise PlantRangerUnavailableError(
                f"Plant Ranger service is temporarily unavailable (HTTP {code})"
            )
        raise PlantRangerAPIError(f"Failed to retrieve {resource} (HTTP {code})")


__all__ = [
    "PlantRangerAPIError",
    "PlantRangerClient",
    "PlantRangerNotFoundError",
    "PlantRangerTimeoutError",
    "PlantRangerUnauthorizedError",
    "PlantRangerUnavailableError",
]
