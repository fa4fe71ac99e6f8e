"""
AWS Lambda entrypoint for the Plant Ranger Check skill.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Mapping

from alexa_skill import speech
from alexa_skill.dispatcher import SkillDispatcher
from alexa_skill.responses import tell
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.dependencies.clients import get_skill_dispatcher

logger = logging.getLogger(__name__)

# Keys only present when API Gateway proxies the call (REST and HTTP APIs).
_PROXY_EVENT_KEYS = ("resource", "routeKey")


def _bootstrap() -> SkillDispatcher:
    """Build (once per container) the dispatcher and its collaborators."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return get_skill_dispatcher()


def _extract_envelope(event: Any) -> Mapping[str, Any]:
    """Unwrap the Alexa envelope from a direct or API Gateway invocation."""
    if not isinstance(event, Mapping):
        raise ValueError(f"Unsupported event payload type: {type(event).__name__}")
    body = event.get("body")
    if isinstance(body, str):
        return json.loads(body or "{}")
    if isinstance(body, Mapping):
        return body
    return event


def _is_proxy_event(event: Any) -> bool:
    return isinstance(event, Mapping) and any(key in event for key in _PROXY_EVENT_KEYS)


async def handle_event(event: Any) -> Dict[str, Any]:
    """Dispatch one event; any failure becomes the fixed apology response."""
    try:
        envelope = _extract_envelope(event)
        response = await _bootstrap().dispatch(envelope)
    except Exception:
        logger.exception("Error handling skill request")
        response = tell(speech.APOLOGY)
    return response.to_alexa()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    AWS Lambda handler invoked by Alexa directly or through API Gateway.

    Direct invocations get the Alexa response object back; proxied ones get
    it wrapped in an HTTP 200 envelope.
    """
    logger.debug("Received event: %s", json.dumps(event, default=str))
    payload = asyncio.run(handle_event(event))

    if _is_proxy_event(event):
        return {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps(payload),
        }
    return payload


__all__ = ["handle_event", "lambda_handler"]
