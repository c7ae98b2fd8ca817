"""Shared dependencies for API endpoints."""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from forge.api.errors import OAuthNotConfigured
from forge.auth.shopify import ShopifyConfig, ShopifyOAuth
from forge.config import Settings
from forge.db.repository import ProfileRepository


def get_settings(request: Request) -> Settings:
    """Settings the app was built with."""
    return request.app.state.settings


def get_shopify_config(request: Request) -> ShopifyConfig | None:
    """Shopify credentials, or None when they were not configured."""
    return request.app.state.shopify_config


def get_oauth(
    config: ShopifyConfig | None = Depends(get_shopify_config),
) -> ShopifyOAuth:
    """Get the Shopify OAuth client, failing when credentials are missing."""
    if config is None:
        raise OAuthNotConfigured(
            "OAuth not configured",
            detail="Set SHOPIFY_CLIENT_ID and SHOPIFY_CLIENT_SECRET.",
        )
    return ShopifyOAuth(config)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_profile_repo(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ProfileRepository:
    """Profile repository scoped to the configured application id."""
    return ProfileRepository(db, settings.app_id)
