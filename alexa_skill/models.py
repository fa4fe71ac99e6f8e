"""
Inbound Alexa request envelope and the normalized request handed to intents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, TypedDict

LAUNCH_REQUEST = "LaunchRequest"
INTENT_REQUEST = "IntentRequest"
SESSION_ENDED_REQUEST = "SessionEndedRequest"

UNKNOWN_USER_ID = "unknown"


class AlexaUser(TypedDict, total=False):
    userId: str
    accessToken: str


class AlexaIntent(TypedDict, total=False):
    name: str
    slots: Dict[str, Dict[str, Any]]


class AlexaRequestBody(TypedDict, total=False):
    type: str
    requestId: str
    timestamp: str
    locale: str
    intent: AlexaIntent
    reason: str
    error: Dict[str, str]


class AlexaEnvelope(TypedDict, total=False):
    """Payload structure delivered by the Alexa service."""

    version: str
    session: Dict[str, Any]
    context: Dict[str, Any]
    request: AlexaRequestBody


Extractor = Callable[[Mapping[str, Any]], Optional[str]]


def _dig(source: Any, *path: Any) -> Any:
    """Walk nested dicts/lists, returning ``None`` at the first missing step."""
    current = source
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
        elif not isinstance(current, Mapping):
            return None
        current = current[step] if isinstance(step, int) else current.get(step)
        if current is None:
            return None
    return current


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def first_present(extractors: Sequence[Extractor], source: Mapping[str, Any]) -> Optional[str]:
    """Run extractors in order and return the first non-empty value."""
    for extract in extractors:
        value = extract(source)
        if value:
            return value
    return None


USER_ID_EXTRACTORS: tuple[Extractor, ...] = (
    lambda envelope: _text(_dig(envelope, "session", "user", "userId")),
    lambda envelope: _text(_dig(envelope, "context", "System", "user", "userId")),
)

ACCESS_TOKEN_EXTRACTORS: tuple[Extractor, ...] = (
    lambda envelope: _text(_dig(envelope, "context", "System", "user", "accessToken")),
    lambda envelope: _text(_dig(envelope, "session", "user", "accessToken")),
)

_RESOLVED_VALUE = ("resolutions", "resolutionsPerAuthority", 0, "values", 0, "value")

SLOT_VALUE_EXTRACTORS: tuple[Extractor, ...] = (
    lambda slot: _text(slot.get("value")),
    lambda slot: _text(_dig(slot, *_RESOLVED_VALUE, "name")),
    lambda slot: _text(_dig(slot, *_RESOLVED_VALUE, "id")),
)


@dataclass
class SkillRequest:
    """Normalized view of an Alexa envelope."""

    request_type: str
    user_id: str = UNKNOWN_USER_ID
    access_token: Optional[str] = None
    intent_name: Optional[str] = None
    slots: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    reason: Optional[str] = None
    error: Optional[Dict[str, Any]] = None

    @classmethod
    def from_envelope(cls, envelope: Mapping[str, Any]) -> "SkillRequest":
        body = envelope.get("request") or {}
        intent = body.get("intent") or {}
        return cls(
            request_type=body.get("type") or "",
            user_id=first_present(USER_ID_EXTRACTORS, envelope) or UNKNOWN_USER_ID,
            access_token=first_present(ACCESS_TOKEN_EXTRACTORS, envelope),
            intent_name=intent.get("name"),
            slots=intent.get("slots") or {},
            reason=body.get("reason"),
            error=body.get("error"),
        )

    def slot_value(self, name: str) -> Optional[str]:
        slot = self.slots.get(name)
        if not isinstance(slot, Mapping):
            return None
        return first_present(SLOT_VALUE_EXTRACTORS, slot)


__all__ = [
    "ACCESS_TOKEN_EXTRACTORS",
    "AlexaEnvelope",
    "INTENT_REQUEST",
    "LAUNCH_REQUEST",
    "SESSION_ENDED_REQUEST",
    "SLOT_VALUE_EXTRACTORS",
    "SkillRequest",
    "UNKNOWN_USER_ID",
    "USER_ID_EXTRACTORS",
    "first_present",
]
