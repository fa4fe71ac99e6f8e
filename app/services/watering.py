"""
Watering-need signals read from Plant Ranger plant payloads.

The API has reported watering need in three shapes over time: a status
string, a boolean flag (snake_case or camelCase), and the latest checkup
record. All of them are honoured.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

NEEDS_WATER_STATUSES = frozenset({"needs_water", "needs water"})


def _status_needs_water(record: Mapping[str, Any]) -> bool:
    status = record.get("status")
    return isinstance(status, str) and status.strip().lower() in NEEDS_WATER_STATUSES


def plant_needs_water(plant: Mapping[str, Any]) -> bool:
    """Signal carried directly on a plant object (team summary or detail)."""
    return (
        _status_needs_water(plant)
        or plant.get("needs_water") is True
        or plant.get("needsWater") is True
    )


def latest_checkup(plant_detail: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    """The API lists checkups newest first."""
    checkups = plant_detail.get("checkups") or []
    if not checkups or not isinstance(checkups[0], Mapping):
        return None
    return checkups[0]


def checkup_needs_water(checkup: Mapping[str, Any]) -> bool:
    return (
        _status_needs_water(checkup)
        or checkup.get("needs_watered") is True
        or checkup.get("needsWatered") is True
    )


def detail_needs_water(plant_detail: Mapping[str, Any]) -> bool:
    """Plant detail flags first, then its latest checkup."""
    if plant_needs_water(plant_detail):
        return True
    checkup = latest_checkup(plant_detail)
    return checkup is not None and checkup_needs_water(checkup)


__all__ = [
    "NEEDS_WATER_STATUSES",
    "checkup_needs_water",
    "detail_needs_water",
    "latest_checkup",
    "plant_needs_water",
]
