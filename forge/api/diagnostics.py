"""Debug-only endpoints for checking the profile store wiring.

Mounted only when FORGE_ENABLE_DIAGNOSTICS is set.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from forge.api.deps import get_profile_repo, get_settings
from forge.api.errors import InvalidRequest, StoreUnavailable, log_error
from forge.api.pages import diagnostic_failure_page, diagnostic_success_page
from forge.config import Settings
from forge.db.repository import ProfileRepository
from forge.handshake import upgrade_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/test", tags=["diagnostics"])

TEST_SHOP = "test-store.myshopify.com"
TEST_TOKEN = "mock_token_12345"


@router.get("/handshake", response_class=HTMLResponse)
async def test_handshake(
    uid: str | None = Query(None),
    profiles: ProfileRepository = Depends(get_profile_repo),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Write a synthetic upgrade for ``uid`` without talking to Shopify."""
    if not uid or not uid.strip():
        raise InvalidRequest("Missing uid.")
    uid = uid.strip()

    try:
        upgrade_profile(profiles, uid, TEST_SHOP, TEST_TOKEN)
    except StoreUnavailable as e:
        log_error(e, user_id=uid, endpoint="test_handshake", exc=e.__cause__)
        return HTMLResponse(
            content=diagnostic_failure_page(uid, e.detail or e.message, settings.profile_path),
            status_code=e.status_code,
        )

    logger.info("Diagnostic handshake wrote profile for user=%s", uid)
    return HTMLResponse(content=diagnostic_success_page(uid))
