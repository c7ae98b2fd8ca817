"""Shopify OAuth endpoints."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from forge.api.deps import get_oauth, get_profile_repo, get_shopify_config
from forge.api.errors import InvalidRequest, StoreUnavailable, UpstreamAuthFailure, log_error
from forge.api.pages import handshake_failure_page, handshake_success_page
from forge.auth.shopify import ShopifyConfig
from forge.auth.state import decode_state
from forge.db.repository import ProfileRepository
from forge.handshake import begin_handshake, complete_handshake

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/api/auth/shopify")
async def shopify_auth_start(
    shop: str | None = Query(None, description="Shopify store domain (e.g., store.myshopify.com)"),
    uid: str | None = Query(None, description="User whose profile is upgraded on success"),
    config: ShopifyConfig | None = Depends(get_shopify_config),
) -> RedirectResponse:
    """Start Shopify OAuth flow."""
    if not shop or not shop.strip():
        raise InvalidRequest("Missing shop")

    auth_url = begin_handshake(get_oauth(config), shop, uid)
    return RedirectResponse(url=auth_url, status_code=302)


@router.get("/api/shopify/callback", response_class=HTMLResponse)
async def shopify_auth_callback(
    shop: str | None = Query(None),
    code: str | None = Query(None),
    state: str | None = Query(None),
    config: ShopifyConfig | None = Depends(get_shopify_config),
    profiles: ProfileRepository = Depends(get_profile_repo),
) -> HTMLResponse:
    """Handle Shopify OAuth callback and upgrade the user's profile."""
    if not code:
        raise InvalidRequest("No code")

    oauth = get_oauth(config)

    try:
        result = await complete_handshake(oauth, profiles, shop, code, state)
    except (UpstreamAuthFailure, StoreUnavailable) as e:
        log_error(
            e,
            user_id=decode_state(state),
            endpoint="shopify_callback",
            exc=e.__cause__,
        )
        return HTMLResponse(content=handshake_failure_page(), status_code=e.status_code)

    return HTMLResponse(content=handshake_success_page(result.user_id))
