"""SQLAlchemy models for the merchant profile store."""

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import DeclarativeBase


TIER_COMMANDER = "Commander"


def utcnow() -> datetime:
    """Server-assigned write time."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class MerchantProfile(Base):
    """Merchant profile document, addressed by application id and user id."""

    __tablename__ = "merchant_profiles"

    app_id = Column(String(100), primary_key=True)
    user_id = Column(String(255), primary_key=True)
    tier = Column(String(50))  # None until the merchant links a store
    shop_url = Column(String(255))
    shopify_token = Column(Text)  # Encrypted access token
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def path(self) -> str:
        return f"/artifacts/{self.app_id}/users/{self.user_id}"

    def __repr__(self) -> str:
        return f"<MerchantProfile {self.path} tier={self.tier}>"
