try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

from alexa_skill.models import UNKNOWN_USER_ID, SkillRequest
from alexa_skill.responses import ask, link_account_card, simple_card, tell


def test_identity_prefers_session_user_and_context_token() -> None:
    envelope = {
        "session": {"user": {"userId": "session-user", "accessToken": "session-token"}},
        "context": {"System": {"user": {"userId": "context-user", "accessToken": "context-token"}}},
        "request": {"type": "LaunchRequest"},
    }

    request = SkillRequest.from_envelope(envelope)

    assert request.user_id == "session-user"
    assert request.access_token == "context-token"


def test_identity_falls_back_to_context_and_session() -> None:
    envelope = {
        "session": {"user": {"accessToken": "session-token"}},
        "context": {"System": {"user": {"userId": "context-user"}}},
        "request": {"type": "LaunchRequest"},
    }

    request = SkillRequest.from_envelope(envelope)

    assert request.user_id == "context-user"
    assert request.access_token == "session-token"


def test_missing_identity_defaults() -> None:
    request = SkillRequest.from_envelope({"request": {"type": "IntentRequest"}})

    assert request.user_id == UNKNOWN_USER_ID
    assert request.access_token is None
    assert request.intent_name is None


def test_slot_value_sources_in_order() -> None:
    resolved = {
        "resolutions": {
            "resolutionsPerAuthority": [
                {"values": [{"value": {"name": "Kitchen", "id": "team-kitchen"}}]}
            ]
        }
    }
    request = SkillRequest.from_envelope(
        {
            "request": {
                "type": "IntentRequest",
                "intent": {
                    "name": "CheckTeamPlantStatusIntent",
                    "slots": {
                        "Direct": {"name": "Direct", "value": "office"},
                        "Resolved": {"name": "Resolved", **resolved},
                        "IdOnly": {
                            "name": "IdOnly",
                            "resolutions": {
                                "resolutionsPerAuthority": [
                                    {"values": [{"value": {"id": "team-7"}}]}
                                ]
                            },
                        },
                        "Empty": {"name": "Empty"},
                    },
                },
            }
        }
    )

    assert request.slot_value("Direct") == "office"
    assert request.slot_value("Resolved") == "Kitchen"
    assert request.slot_value("IdOnly") == "team-7"
    assert request.slot_value("Empty") is None
    assert request.slot_value("Missing") is None


def test_ask_keeps_session_open_and_tell_ends_it() -> None:
    asked = ask("Which team?", "Say a team name.").to_alexa()
    told = tell("Bye", card=simple_card("Title", "Body")).to_alexa()

    assert asked["version"] == "1.0"
    assert asked["response"]["shouldEndSession"] is False
    assert asked["response"]["outputSpeech"] == {"type": "PlainText", "text": "Which team?"}
    assert asked["response"]["reprompt"]["outputSpeech"]["text"] == "Say a team name."
    assert told["response"]["shouldEndSession"] is True
    assert "reprompt" not in told["response"]
    assert told["response"]["card"] == {"type": "Simple", "title": "Title", "content": "Body"}


def test_link_account_card_has_only_type() -> None:
    rendered = tell("Link please", card=link_account_card()).to_alexa()

    assert rendered["response"]["card"] == {"type": "LinkAccount"}
