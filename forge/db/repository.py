"""Repository classes for data access."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forge.auth.crypto import encrypt_token, decrypt_token
from forge.db.models import MerchantProfile, utcnow

logger = logging.getLogger(__name__)


class ProfileRepository:
    """Repository for merchant profiles under one application id."""

    def __init__(self, db: Session, app_id: str):
        self.db = db
        self.app_id = app_id

    def get(self, user_id: str) -> MerchantProfile | None:
        """Get a profile by user id."""
        return (
            self.db.query(MerchantProfile)
            .filter(
                MerchantProfile.app_id == self.app_id,
                MerchantProfile.user_id == user_id,
            )
            .first()
        )

    def get_shopify_token(self, user_id: str) -> str | None:
        """Get the decrypted Shopify access token stored for a user."""
        profile = self.get(user_id)
        if not profile:
            return None
        return decrypt_token(profile.shopify_token)

    def upsert(
        self,
        user_id: str,
        tier: str | None = None,
        shop_url: str | None = None,
        shopify_token: str | None = None,
    ) -> MerchantProfile:
        """Create or merge into a profile.

        Fields passed as None are left as they are. The token is encrypted
        before it reaches the database.
        """
        data: dict[str, Any] = {}
        if tier is not None:
            data["tier"] = tier
        if shop_url is not None:
            data["shop_url"] = shop_url
        if shopify_token is not None:
            data["shopify_token"] = encrypt_token(shopify_token)

        try:
            profile = self.get(user_id)
            if profile is None:
                profile = MerchantProfile(app_id=self.app_id, user_id=user_id)
                self.db.add(profile)

            for key, value in data.items():
                setattr(profile, key, value)
            profile.updated_at = utcnow()

            self.db.commit()
            self.db.refresh(profile)
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info("Upserted profile %s (fields=%s)", profile.path, sorted(data))
        return profile

    def count(self) -> int:
        """Number of profiles under this application id."""
        return (
            self.db.query(MerchantProfile)
            .filter(MerchantProfile.app_id == self.app_id)
            .count()
        )
