"""Merchant store linking: Shopify OAuth handshake and tier upgrade."""

import logging
from dataclasses import dataclass

import httpx
from sqlalchemy.exc import SQLAlchemyError

from forge.api.errors import InvalidRequest, StoreUnavailable, UpstreamAuthFailure
from forge.auth.shopify import ShopifyOAuth, normalize_shop_domain
from forge.auth.state import encode_state, decode_state
from forge.db.models import MerchantProfile, TIER_COMMANDER
from forge.db.repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass
class HandshakeResult:
    """Outcome of a completed handshake."""

    shop: str
    user_id: str | None
    profile: MerchantProfile | None = None

    @property
    def upgraded(self) -> bool:
        return self.profile is not None


def resolve_shop(shop: str | None) -> str:
    """Normalize and validate a shop domain from the query string."""
    if not shop or not shop.strip():
        raise InvalidRequest("Missing shop")

    domain = normalize_shop_domain(shop)
    if not ShopifyOAuth.validate_shop_domain(domain):
        raise InvalidRequest(
            "Invalid shop domain",
            detail="Must be in format: store.myshopify.com",
        )
    return domain


def begin_handshake(oauth: ShopifyOAuth, shop: str | None, user_id: str | None) -> str:
    """Build the Shopify authorization URL for a merchant.

    Does not touch the profile store; the user id travels in ``state``.
    """
    domain = resolve_shop(shop)
    url = oauth.get_authorization_url(domain, encode_state(user_id))
    logger.info("Starting handshake for shop=%s user=%s", domain, user_id or "anonymous")
    return url


def upgrade_profile(
    profiles: ProfileRepository,
    user_id: str,
    shop: str,
    access_token: str,
) -> MerchantProfile:
    """Promote a user to Commander and record their linked store."""
    try:
        return profiles.upsert(
            user_id,
            tier=TIER_COMMANDER,
            shop_url=shop,
            shopify_token=access_token,
        )
    except SQLAlchemyError as e:
        raise StoreUnavailable("Profile store unavailable", detail=str(e)) from e


async def complete_handshake(
    oauth: ShopifyOAuth,
    profiles: ProfileRepository,
    shop: str | None,
    code: str | None,
    state: str | None,
) -> HandshakeResult:
    """Exchange the authorization code and upgrade the initiating user.

    The exchange and the profile write are two separate steps; a failure
    after the exchange leaves the new token unsaved.

    Raises:
        InvalidRequest: If ``code`` or ``shop`` is missing
        UpstreamAuthFailure: If Shopify rejects the exchange or is unreachable
        StoreUnavailable: If the profile write fails
    """
    if not code:
        raise InvalidRequest("No code")

    domain = resolve_shop(shop)
    user_id = decode_state(state)

    try:
        token_response = await oauth.exchange_code_for_token(domain, code)
    except (httpx.HTTPError, ValueError) as e:
        raise UpstreamAuthFailure(
            "Failed to obtain access token from Shopify", detail=str(e)
        ) from e

    logger.info("Token exchange succeeded for shop=%s", domain)

    if user_id is None:
        logger.info("Anonymous handshake for shop=%s; no profile written", domain)
        return HandshakeResult(shop=domain, user_id=None)

    profile = upgrade_profile(profiles, user_id, domain, token_response.access_token)
    return HandshakeResult(shop=domain, user_id=user_id, profile=profile)
