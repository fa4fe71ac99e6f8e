"""
FastAPI routes for the self-hosted skill endpoint and account linking.
"""

from __future__ import annotations

import hmac
import logging
import uuid
from datetime import datetime, timedelta, timezone
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from alexa_skill import speech
from alexa_skill.responses import tell
from app.clients.oauth import OAuthTokenExchangeError
from app.dependencies import (
    get_app_settings,
    get_oauth_client,
    get_oauth_state_encoder,
    get_oauth_token_service,
    get_skill_dispatcher,
)
from app.schemas import ManualTokenRequest, OAuthCallbackPayload

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.post("/alexa", status_code=HTTPStatus.OK)
async def handle_skill_request(
    request: Request,
    dispatcher: Annotated[Any, Depends(get_skill_dispatcher)],
) -> dict:
    """HTTPS endpoint equivalent of the Lambda handler."""
    try:
        envelope = await request.json()
        response = await dispatcher.dispatch(envelope)
    except Exception:
        logger.exception("Error handling skill request")
        response = tell(speech.APOLOGY)
    return response.to_alexa()


@router.get("/auth/authorize", status_code=HTTPStatus.OK, response_model=None)
async def start_account_linking(
    request: Request,
    oauth_client: Annotated[Any, Depends(get_oauth_client)],
    state_encoder: Annotated[Any, Depends(get_oauth_state_encoder)],
    user_id: str = Query(..., description="Voice-platform user identifier to link."),
    redirect: bool = Query(
        default=False,
        description="When true, respond with a redirect to the consent screen.",
    ),
) -> dict | RedirectResponse:
    """
    Kick off account linking by generating a state token and authorization URL.
    """
    state = state_encoder.encode(
        {
            "nonce": uuid.uuid4().hex,
            "user_id": user_id,
            "issued_at": datetime.now(timezone.utc).isoformat(),
        }
    )
    authorization_url = oauth_client.build_authorization_url(state=state)

    wants_html = "text/html" in request.headers.get("accept", "").lower()
    if redirect or wants_html:
        return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    return {"authorization_url": authorization_url, "state": state}


async def _complete_account_linking(
    *,
    code: str,
    state: str,
    oauth_client: Any,
    state_encoder: Any,
    token_service: Any,
    settings: Any,
) -> dict:
    state_data = state_encoder.decode(state)

    user_id = state_data.get("user_id")
    issued_at_raw = state_data.get("issued_at")
    if not user_id or not issued_at_raw:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="OAuth state is missing required fields.",
        )

    try:
        issued_at = datetime.fromisoformat(issued_at_raw)
    except (TypeError, ValueError) as exc:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="OAuth state carries an invalid timestamp.",
        ) from exc
    if issued_at.tzinfo is None:
        issued_at = issued_at.replace(tzinfo=timezone.utc)
    max_age = timedelta(seconds=settings.oauth.state_ttl_seconds)
    if datetime.now(timezone.utc) - issued_at > max_age:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="OAuth state has expired; please restart account linking.",
        )

    try:
        grant = await oauth_client.exchange_authorization_code(code)
    except OAuthTokenExchangeError as exc:
        logger.warning("Authorization code exchange failed for user %s: %s", user_id, exc)
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="Failed to exchange authorization code.",
        ) from exc

    record = token_service.store_grant(user_id, grant)
    logger.info("Linked Plant Ranger account for user %s", user_id)
    return {"status": "connected", "user_id": user_id, "expires_at": record.expires_at}


@router.get("/auth/callback", status_code=HTTPStatus.OK)
async def account_linking_redirect(
    oauth_client: Annotated[Any, Depends(get_oauth_client)],
    state_encoder: Annotated[Any, Depends(get_oauth_state_encoder)],
    token_service: Annotated[Any, Depends(get_oauth_token_service)],
    settings: Annotated[Any, Depends(get_app_settings)],
    code: str = Query(...),
    state: str = Query(...),
) -> dict:
    """Browser redirect target of the consent screen."""
    return await _complete_account_linking(
        code=code,
        state=state,
        oauth_client=oauth_client,
        state_encoder=state_encoder,
        token_service=token_service,
        settings=settings,
    )


@router.post("/auth/callback", status_code=HTTPStatus.OK)
async def account_linking_callback(
    payload: OAuthCallbackPayload,
    oauth_client: Annotated[Any, Depends(get_oauth_client)],
    state_encoder: Annotated[Any, Depends(get_oauth_state_encoder)],
    token_service: Annotated[Any, Depends(get_oauth_token_service)],
    settings: Annotated[Any, Depends(get_app_settings)],
) -> dict:
    """Complete the code exchange posted by a front-end."""
    return await _complete_account_linking(
        code=payload.code,
        state=payload.state,
        oauth_client=oauth_client,
        state_encoder=state_encoder,
        token_service=token_service,
        settings=settings,
    )


@router.put("/tokens/{user_id}", status_code=HTTPStatus.OK)
async def store_manual_token(
    user_id: str,
    payload: ManualTokenRequest,
    token_service: Annotated[Any, Depends(get_oauth_token_service)],
    settings: Annotated[Any, Depends(get_app_settings)],
    x_admin_key: str | None = Header(default=None),
) -> dict:
    """Store a Plant Ranger API token for a user without going through OAuth."""
    expected = settings.security.admin_api_key
    if not expected:
        raise HTTPException(
            status_code=HTTPStatus.FORBIDDEN,
            detail="Manual token entry is disabled.",
        )
    if not x_admin_key or not hmac.compare_digest(x_admin_key, expected):
        raise HTTPException(status_code=HTTPStatus.UNAUTHORIZED, detail="Invalid admin key.")

    record = token_service.store_token(user_id, payload.token)
    logger.info("Stored manual token for user %s", user_id)
    return {"status": "stored", "user_id": user_id, "expires_at": record.expires_at}


__all__ = ["router"]
