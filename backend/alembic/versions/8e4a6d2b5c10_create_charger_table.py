"""create_charger_table

Revision ID: 8e4a6d2b5c10
Revises: 3b1f0c9d2a7e
Create Date: 2026-10-17 09:20:03.551907

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8e4a6d2b5c10'
down_revision: Union[str, Sequence[str], None] = '3b1f0c9d2a7e'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "charger",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("partner_id", sa.String(length=36), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="AVAILABLE"),
        sa.Column("meter_value", sa.Float(), nullable=False, server_default="0"),
        sa.Column("last_update", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["partner_id"], ["partner.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_charger_partner_id", "charger", ["partner_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_charger_partner_id", table_name="charger", if_exists=True)
    op.drop_table("charger", if_exists=True)
