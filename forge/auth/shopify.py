"""Shopify OAuth 2.0 implementation and Admin API client."""

import os
import re
import logging
from urllib.parse import urlencode, urlparse
from dataclasses import dataclass
from typing import Optional

import httpx


logger = logging.getLogger(__name__)


# Shopify OAuth endpoints
SHOPIFY_AUTH_URL = "https://{shop}/admin/oauth/authorize"
SHOPIFY_TOKEN_URL = "https://{shop}/admin/oauth/access_token"

# Shopify Admin API version
SHOPIFY_API_VERSION = "2024-01"

DEFAULT_SCOPES = "read_products,write_products,read_content,write_content"

CALLBACK_PATH = "/api/shopify/callback"

SHOP_SUFFIX = ".myshopify.com"

# Regex for valid Shopify shop domains
SHOP_DOMAIN_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9\-]*\.myshopify\.com$")


@dataclass(frozen=True)
class ShopifyConfig:
    """Shopify OAuth configuration."""

    api_key: str
    api_secret: str
    app_url: str
    scopes: str = DEFAULT_SCOPES
    api_version: str = SHOPIFY_API_VERSION

    @classmethod
    def from_env(cls) -> "ShopifyConfig":
        """Load configuration from environment variables."""
        api_key = os.getenv("SHOPIFY_CLIENT_ID") or os.getenv("SHOPIFY_API_KEY")
        api_secret = os.getenv("SHOPIFY_CLIENT_SECRET") or os.getenv("SHOPIFY_API_SECRET")
        scopes = os.getenv("SHOPIFY_SCOPES", DEFAULT_SCOPES)
        app_url = os.getenv("APP_URL", "http://localhost:3001")
        api_version = os.getenv("SHOPIFY_API_VERSION", SHOPIFY_API_VERSION)

        if not api_key or not api_secret:
            raise ValueError(
                "SHOPIFY_CLIENT_ID and SHOPIFY_CLIENT_SECRET must be set"
            )

        return cls(
            api_key=api_key,
            api_secret=api_secret,
            app_url=app_url.rstrip("/"),
            scopes=scopes,
            api_version=api_version,
        )

    @property
    def redirect_uri(self) -> str:
        """Callback address registered with Shopify."""
        return f"{self.app_url}{CALLBACK_PATH}"


@dataclass
class OAuthTokenResponse:
    """Response from Shopify token exchange."""

    access_token: str
    scope: str
    associated_user_scope: Optional[str] = None
    associated_user: Optional[dict] = None


def normalize_shop_domain(shop: str) -> str:
    """Reduce user input to the canonical ``<store>.myshopify.com`` form.

    Examples:
        'myshop' -> 'myshop.myshopify.com'
        'MyShop.myshopify.com' -> 'myshop.myshopify.com'
        'https://myshop.myshopify.com/admin' -> 'myshop.myshopify.com'
    """
    value = shop.strip().lower()

    if value.startswith("http://") or value.startswith("https://"):
        parsed = urlparse(value)
        value = parsed.netloc or parsed.path

    value = value.split("/")[0]

    if value and not value.endswith(SHOP_SUFFIX):
        value = f"{value}{SHOP_SUFFIX}"

    return value


class ShopifyOAuth:
    """Shopify OAuth 2.0 client."""

    def __init__(self, config: ShopifyConfig):
        self.config = config

    @staticmethod
    def validate_shop_domain(shop: str) -> bool:
        """Validate that a shop domain is a valid Shopify domain.

        Args:
            shop: Shop domain to validate

        Returns:
            True if valid, False otherwise
        """
        if not shop:
            return False
        return bool(SHOP_DOMAIN_PATTERN.match(shop))

    def get_authorization_url(self, shop: str, state: str) -> str:
        """Build the Shopify authorization URL.

        Args:
            shop: Shopify store domain (e.g., store.myshopify.com)
            state: Opaque value Shopify echoes back on the callback

        Returns:
            Full authorization URL to redirect the merchant to
        """
        if not self.validate_shop_domain(shop):
            raise ValueError(f"Invalid shop domain: {shop}")

        params = {
            "client_id": self.config.api_key,
            "scope": self.config.scopes,
            "redirect_uri": self.config.redirect_uri,
            "state": state,
        }

        return SHOPIFY_AUTH_URL.format(shop=shop) + "?" + urlencode(params)

    async def exchange_code_for_token(
        self, shop: str, code: str
    ) -> OAuthTokenResponse:
        """Exchange authorization code for access token.

        Args:
            shop: Shopify store domain
            code: Authorization code from callback

        Returns:
            OAuthTokenResponse with access token and granted scopes

        Raises:
            httpx.HTTPError: If the request fails or Shopify rejects it
            ValueError: If the response carries no usable access token
        """
        url = SHOPIFY_TOKEN_URL.format(shop=shop)

        payload = {
            "client_id": self.config.api_key,
            "client_secret": self.config.api_secret,
            "code": code,
        }

        async with httpx.AsyncClient() as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise ValueError("Shopify token response is not a JSON object")

        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("Shopify token response did not include an access token")

        return OAuthTokenResponse(
            access_token=access_token,
            scope=data.get("scope", ""),
            associated_user_scope=data.get("associated_user_scope"),
            associated_user=data.get("associated_user"),
        )


@dataclass
class ShopifyProduct:
    """Product created through the Admin API."""

    id: str
    handle: str
    title: str
    url: str


class ShopifyAdminClient:
    """Shopify Admin API client for product operations."""

    def __init__(self, shop: str, access_token: str, api_version: str = SHOPIFY_API_VERSION):
        """Initialize the Admin API client.

        Args:
            shop: Shopify store domain (e.g., store.myshopify.com)
            access_token: Shopify access token supplied by the caller
            api_version: Admin API version segment
        """
        self.shop = shop
        self.access_token = access_token
        self.base_url = f"https://{shop}/admin/api/{api_version}"

    def _headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }

    def storefront_url(self, handle: str) -> str:
        """Public product page for a product handle."""
        return f"https://{self.shop}/products/{handle}"

    async def create_product(
        self,
        title: str,
        body_html: str = "",
        image_url: str | None = None,
    ) -> ShopifyProduct:
        """Create a product on the merchant's store.

        Args:
            title: Product title
            body_html: Product description HTML
            image_url: Optional image source URL

        Returns:
            ShopifyProduct with the storefront URL

        Raises:
            httpx.HTTPError: If the request fails or Shopify rejects it
            ValueError: If Shopify answers without a product handle
        """
        product = {
            "title": title,
            "body_html": body_html,
        }
        if image_url:
            product["images"] = [{"src": image_url}]

        url = f"{self.base_url}/products.json"

        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.post(url, headers=self._headers(), json={"product": product})
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise ValueError("Shopify product response is not a JSON object")

        created = data.get("product")
        if not isinstance(created, dict):
            raise ValueError("Shopify response did not include a product")

        handle = created.get("handle")
        if not isinstance(handle, str) or not handle:
            raise ValueError("Shopify response did not include a product handle")

        return ShopifyProduct(
            id=str(created.get("id")),
            handle=handle,
            title=created.get("title", title),
            url=self.storefront_url(handle),
        )
