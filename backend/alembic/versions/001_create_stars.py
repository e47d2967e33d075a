"""Create the stars table.

Revision ID: 001_stars
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_stars"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stars",
        sa.Column("ordinal", sa.Integer, primary_key=True),
        sa.Column("star_id", sa.String(255), nullable=True),
        sa.Column("payload", sa.JSON, nullable=False),
    )
    op.create_index("ix_stars_star_id", "stars", ["star_id"])


def downgrade() -> None:
    op.drop_index("ix_stars_star_id", table_name="stars")
    op.drop_table("stars")
