"""Merchant profile store."""

from forge.db.database import init_db, ping
from forge.db.models import Base, MerchantProfile, TIER_COMMANDER
from forge.db.repository import ProfileRepository
from forge.db.migrations import run_migrations, get_current_revision, get_session_revision

__all__ = [
    # Database
    "init_db",
    "ping",
    # Models
    "Base",
    "MerchantProfile",
    "TIER_COMMANDER",
    # Repositories
    "ProfileRepository",
    # Migrations
    "run_migrations",
    "get_current_revision",
    "get_session_revision",
]
