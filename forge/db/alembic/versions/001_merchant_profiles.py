"""Merchant profiles table.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "merchant_profiles",
        sa.Column("app_id", sa.String(100), primary_key=True),
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("tier", sa.String(50)),
        sa.Column("shop_url", sa.String(255)),
        sa.Column("shopify_token", sa.Text),
        sa.Column("created_at", sa.DateTime),
        sa.Column("updated_at", sa.DateTime),
    )


def downgrade() -> None:
    op.drop_table("merchant_profiles")
