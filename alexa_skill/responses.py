"""
Outbound skill response and its Alexa JSON rendering.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel

RESPONSE_VERSION = "1.0"


class Card(BaseModel):
    type: Literal["Simple", "LinkAccount"]
    title: Optional[str] = None
    content: Optional[str] = None


class SkillResponse(BaseModel):
    """Spoken text, optional reprompt and card, and whether the session ends."""

    speech: Optional[str] = None
    reprompt: Optional[str] = None
    card: Optional[Card] = None
    should_end_session: bool = True

    def to_alexa(self) -> Dict[str, Any]:
        response: Dict[str, Any] = {"shouldEndSession": self.should_end_session}
        if self.speech:
            response["outputSpeech"] = _plain_text(self.speech)
        if self.reprompt:
            response["reprompt"] = {"outputSpeech": _plain_text(self.reprompt)}
        if self.card is not None:
            response["card"] = self.card.model_dump(exclude_none=True)
        return {"version": RESPONSE_VERSION, "response": response}


def _plain_text(text: str) -> Dict[str, str]:
    return {"type": "PlainText", "text": text}


def ask(speech: str, reprompt: str) -> SkillResponse:
    """Speak and keep the session open for an answer."""
    return SkillResponse(speech=speech, reprompt=reprompt, should_end_session=False)


def tell(speech: str, card: Optional[Card] = None) -> SkillResponse:
    """Speak and end the session."""
    return SkillResponse(speech=speech, card=card, should_end_session=True)


def simple_card(title: str, content: str) -> Card:
    return Card(type="Simple", title=title, content=content)


def link_account_card() -> Card:
    return Card(type="LinkAccount")


__all__ = [
    "Card",
    "RESPONSE_VERSION",
    "SkillResponse",
    "ask",
    "link_account_card",
    "simple_card",
    "tell",
]
