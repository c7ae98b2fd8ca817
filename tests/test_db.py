"""Tests for the profile store."""

import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ["SECRET_KEY"] = "test-secret-key-for-testing"

from forge.db.models import Base, MerchantProfile, TIER_COMMANDER
from forge.db.repository import ProfileRepository


@pytest.fixture
def db_engine():
    """Create in-memory SQLite database for testing."""
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(db_engine):
    """Create database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def profile_repo(db_session):
    """Create profile repository."""
    return ProfileRepository(db_session, "forge-app")


class TestProfileRepository:
    """Tests for ProfileRepository."""

    def test_get_missing_profile(self, profile_repo):
        assert profile_repo.get("nobody") is None
        assert profile_repo.get_shopify_token("nobody") is None

    def test_first_write_creates_profile(self, profile_repo):
        profile = profile_repo.upsert(
            "u1",
            tier=TIER_COMMANDER,
            shop_url="foo.myshopify.com",
            shopify_token="tok123",
        )

        assert profile.app_id == "forge-app"
        assert profile.user_id == "u1"
        assert profile.tier == "Commander"
        assert profile.shop_url == "foo.myshopify.com"
        assert profile.created_at is not None
        assert profile.updated_at is not None
        assert profile.path == "/artifacts/forge-app/users/u1"

    def test_token_is_encrypted_at_rest(self, profile_repo):
        profile = profile_repo.upsert("u1", shopify_token="tok123")

        assert profile.shopify_token != "tok123"
        assert profile_repo.get_shopify_token("u1") == "tok123"

    def test_upsert_merges_fields(self, profile_repo):
        profile_repo.upsert("u1", tier=TIER_COMMANDER, shop_url="foo.myshopify.com")
        profile_repo.upsert("u1", shopify_token="tok456")

        profile = profile_repo.get("u1")
        assert profile.tier == "Commander"
        assert profile.shop_url == "foo.myshopify.com"
        assert profile_repo.get_shopify_token("u1") == "tok456"

    def test_upsert_keeps_existing_fields(self, profile_repo, db_session):
        db_session.add(MerchantProfile(app_id="forge-app", user_id="u1", shop_url="old.myshopify.com"))
        db_session.commit()

        profile_repo.upsert("u1", tier=TIER_COMMANDER)

        profile = profile_repo.get("u1")
        assert profile.tier == "Commander"
        assert profile.shop_url == "old.myshopify.com"

    def test_repeated_upsert_is_idempotent(self, profile_repo):
        for _ in range(2):
            profile_repo.upsert(
                "u1",
                tier=TIER_COMMANDER,
                shop_url="foo.myshopify.com",
                shopify_token="tok123",
            )

        assert profile_repo.count() == 1
        profile = profile_repo.get("u1")
        assert profile.tier == "Commander"
        assert profile.shop_url == "foo.myshopify.com"
        assert profile_repo.get_shopify_token("u1") == "tok123"

    def test_upsert_bumps_updated_at(self, profile_repo):
        first = profile_repo.upsert("u1", tier=TIER_COMMANDER).updated_at
        second = profile_repo.upsert("u1", shop_url="foo.myshopify.com").updated_at

        assert second >= first

    def test_profiles_are_scoped_by_app_id(self, db_session):
        forge = ProfileRepository(db_session, "forge-app")
        other = ProfileRepository(db_session, "other-app")

        forge.upsert("u1", tier=TIER_COMMANDER)

        assert other.get("u1") is None
        assert other.count() == 0
        assert forge.count() == 1


class TestMigrations:
    """Tests for the Alembic migration setup."""

    def test_upgrade_creates_profile_table(self, tmp_path):
        from sqlalchemy import inspect
        from forge.db.migrations import run_migrations, get_current_revision

        url = f"sqlite:///{tmp_path / 'forge.db'}"
        run_migrations(url)

        assert get_current_revision(url) == "001"

        engine = create_engine(url)
        try:
            columns = {c["name"] for c in inspect(engine).get_columns("merchant_profiles")}
        finally:
            engine.dispose()

        assert {"app_id", "user_id", "tier", "shop_url", "shopify_token", "updated_at"} <= columns

    def test_session_revision_reads_bound_database(self, tmp_path):
        from forge.db.migrations import run_migrations, get_session_revision

        url = f"sqlite:///{tmp_path / 'forge.db'}"
        run_migrations(url)

        engine = create_engine(url)
        session = sessionmaker(bind=engine)()
        try:
            assert get_session_revision(session) == "001"
        finally:
            session.close()
            engine.dispose()

    def test_session_revision_unmigrated(self, db_session):
        from forge.db.migrations import get_session_revision

        assert get_session_revision(db_session) is None
