"""Product launch endpoint."""

import logging

import httpx
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from forge.api.errors import BridgeError, InvalidRequest, UpstreamApiRejection, log_error
from forge.api.schemas import LaunchRequest, LaunchResponse
from forge.auth.shopify import ShopifyAdminClient
from forge.handshake import resolve_shop

logger = logging.getLogger(__name__)

router = APIRouter(tags=["launch"])


def _error_response(error: BridgeError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(exclude_none=True),
    )


@router.post("/api/launch", response_model=LaunchResponse)
async def launch_product(request: LaunchRequest):
    """Create a product on the caller's store with the caller's token."""
    try:
        shop = resolve_shop(request.shop_url)
    except InvalidRequest as error:
        log_error(error, endpoint="launch")
        return _error_response(error)

    client = ShopifyAdminClient(shop, request.user_token)

    try:
        product = await client.create_product(
            title=request.name,
            body_html=request.script,
            image_url=request.image_url,
        )
    except (httpx.HTTPError, ValueError) as e:
        error = UpstreamApiRejection("Shopify rejected the launch request")
        log_error(error, endpoint="launch", exc=e)
        return _error_response(error)

    logger.info("Launched product %s on %s", product.handle, shop)
    return LaunchResponse(success=True, url=product.url)
