"""Shared fixtures for integration tests."""

import os

# Set environment BEFORE any imports from forge
os.environ["SECRET_KEY"] = "test-secret-key-for-testing"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from forge.auth.shopify import ShopifyConfig
from forge.config import Settings
from forge.db.models import Base
from forge.db.repository import ProfileRepository
from forge.server import create_app


@pytest.fixture
def db_engine():
    """In-memory database shared by every session in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_id="forge-test",
        database_url="sqlite://",
        enable_diagnostics=True,
        auto_migrate=False,
    )


@pytest.fixture
def shopify_config() -> ShopifyConfig:
    return ShopifyConfig(
        api_key="test-api-key",
        api_secret="test-api-secret",
        app_url="https://bridge.example.com",
    )


@pytest.fixture
def app(settings, shopify_config, session_factory):
    return create_app(settings, shopify_config, session_factory=session_factory)


@pytest.fixture
def test_client(app):
    """Create FastAPI TestClient with test database."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def load_profile(session_factory, settings):
    """Read a profile through a fresh session, as (profile, decrypted token)."""

    def _load(user_id: str):
        db = session_factory()
        try:
            repo = ProfileRepository(db, settings.app_id)
            return repo.get(user_id), repo.get_shopify_token(user_id)
        finally:
            db.close()

    return _load


@pytest.fixture
def count_profiles(session_factory, settings):
    def _count() -> int:
        db = session_factory()
        try:
            return ProfileRepository(db, settings.app_id).count()
        finally:
            db.close()

    return _count
