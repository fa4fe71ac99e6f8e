"""
Aggregate watering status across a user's teams and plants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from app.clients.plant_ranger import PlantRangerClient
from app.services.team_matching import team_display_name
from app.services.watering import detail_needs_water, plant_needs_water

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlantWateringStatus:
    name: str
    plant_id: Any
    needs_water: bool


@dataclass
class WateringReport:
    """Plants that could be classified, plus how many were skipped on errors."""

    plants: List[PlantWateringStatus] = field(default_factory=list)
    skipped: int = 0

    @property
    def needing_water(self) -> List[PlantWateringStatus]:
        return [plant for plant in self.plants if plant.needs_water]

    @property
    def doing_fine(self) -> List[PlantWateringStatus]:
        return [plant for plant in self.plants if not plant.needs_water]

    @property
    def listed(self) -> int:
        return len(self.plants) + self.skipped

    def extend(self, other: "WateringReport") -> None:
        self.plants.extend(other.plants)
        self.skipped += other.skipped


class PlantStatusService:
    """Walk teams and plants, inferring which plants need water."""

    def __init__(self, api_client: PlantRangerClient) -> None:
        self._api = api_client

    async def plant_status(
        self, access_token: str, plant: Dict[str, Any]
    ) -> PlantWateringStatus:
        """Classify one plant from its team summary, fetching detail only when needed."""
        plant_id = plant.get("id")
        name = plant.get("name")

        if plant_needs_water(plant):
            logger.debug("Plant %s flagged as needing water in team summary", plant_id)
            needs_water = True
        elif plant_id is None:
            needs_water = False
        else:
            detail = await self._api.get_plant(access_token, plant_id)
            if not isinstance(detail, dict):
                detail = {}
            needs_water = detail_needs_water(detail)
            name = name or detail.get("name")
            logger.debug("Plant %s classified from detail: needs_water=%s", plant_id, needs_water)

        return PlantWateringStatus(
            name=name or "Unnamed Plant",
            plant_id=plant_id,
            needs_water=needs_water,
        )

    async def team_report(self, access_token: str, team: Dict[str, Any]) -> WateringReport:
        """Report for one team. A failed team lookup propagates to the caller.

        Plants that cannot be classified, malformed entries included, are
        logged and counted as skipped.
        """
        detail = await self._api.get_team(access_token, team.get("id"))
        plants = detail.get("plants") if isinstance(detail, Mapping) else None
        report = WateringReport()
        for plant in plants if isinstance(plants, list) else []:
            if not isinstance(plant, Mapping):
                logger.warning("Skipping malformed plant entry in team %s: %r", team.get("id"), plant)
                report.skipped += 1
                continue
            try:
                report.plants.append(await self.plant_status(access_token, plant))
            except Exception:
                logger.exception("Error getting details for plant %s", plant.get("id"))
                report.skipped += 1
        return report

    async def all_teams_report(
        self, access_token: str, teams: Sequence[Dict[str, Any]]
    ) -> WateringReport:
        """Combined report; teams that cannot be read are left out entirely."""
        combined = WateringReport()
        for team in teams:
            if not isinstance(team, Mapping):
                logger.warning("Skipping malformed team entry: %r", team)
                continue
            try:
                combined.extend(await self.team_report(access_token, team))
            except Exception:
                logger.exception(
                    "Error getting details for team %s (%s)",
                    team.get("id"),
                    team_display_name(team),
                )
        logger.info(
            "Total plants: %d, needing water: %d, skipped: %d",
            len(combined.plants),
            len(combined.needing_water),
            combined.skipped,
        )
        return combined


__all__ = ["PlantStatusService", "PlantWateringStatus", "WateringReport"]
