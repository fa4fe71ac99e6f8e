"""Schemas describing data read from the Plant Ranger API."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

_STATUS_MESSAGES = {
    "healthy": "Your plants are doing great! They appear to be in excellent health.",
    "warning": (
        "Your plants need some attention. "
        "There are a few issues that should be addressed."
    ),
    "critical": (
        "Your plants need immediate care. Please check them as soon as possible."
    ),
}
_UNKNOWN_STATUS_MESSAGE = (
    "Plant health status is currently unknown. Please check your plants manually."
)

_RECOMMENDATIONS = {
    "healthy": [
        "Continue your current care routine",
        "Monitor soil moisture regularly",
        "Check for pests weekly",
    ],
    "warning": [
        "Check soil moisture levels",
        "Ensure adequate lighting",
        "Review watering schedule",
        "Check for signs of pests or disease",
    ],
    "critical": [
        "Check soil moisture immediately",
        "Inspect for pests or disease",
        "Consider adjusting watering schedule",
        "Ensure proper drainage",
        "Check lighting conditions",
    ],
}
_UNKNOWN_RECOMMENDATIONS = [
    "Check soil moisture",
    "Inspect plant leaves and stems",
    "Ensure adequate lighting",
    "Review watering schedule",
]


class HealthReport(BaseModel):
    """Summary of the ``/health`` endpoint enriched with canned guidance."""

    status: str
    message: str
    recommendations: List[str] = Field(default_factory=list)
    last_checked: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @classmethod
    def from_status(cls, status: str) -> "HealthReport":
        key = status.strip().lower()
        return cls(
            status=status,
            message=_STATUS_MESSAGES.get(key, _UNKNOWN_STATUS_MESSAGE),
            recommendations=list(_RECOMMENDATIONS.get(key, _UNKNOWN_RECOMMENDATIONS)),
        )


__all__ = ["HealthReport"]
