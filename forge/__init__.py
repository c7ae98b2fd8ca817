"""Forge Bridge: Shopify OAuth handshake and merchant tier upgrades."""

__version__ = "1.0.10"
