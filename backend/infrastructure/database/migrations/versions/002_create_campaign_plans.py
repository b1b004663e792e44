"""Create campaign_plans table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "campaign_plans",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "newsroom_id",
            sa.Integer(),
            sa.ForeignKey("newsrooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("inputs", sa.JSON(), nullable=False),
        sa.Column("generated_plan", sa.Text(), nullable=False),
        sa.Column("ai_model", sa.String(length=100), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_campaign_plans_newsroom_id", "campaign_plans", ["newsroom_id"])


def downgrade() -> None:
    op.drop_index("ix_campaign_plans_newsroom_id", table_name="campaign_plans")
    op.drop_table("campaign_plans")
