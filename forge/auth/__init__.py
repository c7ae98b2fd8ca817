"""Shopify OAuth, state handling and token encryption."""

from .crypto import encrypt_token, decrypt_token
from .shopify import (
    ShopifyAdminClient,
    ShopifyConfig,
    ShopifyOAuth,
    normalize_shop_domain,
)
from .state import ANONYMOUS, encode_state, decode_state

__all__ = [
    "encrypt_token",
    "decrypt_token",
    "ShopifyAdminClient",
    "ShopifyConfig",
    "ShopifyOAuth",
    "normalize_shop_domain",
    "ANONYMOUS",
    "encode_state",
    "decode_state",
]
