"""Create the articles table.

Revision ID: 001_baseline
Revises:
Create Date: 2026-10-18

Databases bootstrapped by the service at startup (DB_CREATE_SCHEMA=true)
already have this table; mark it as applied with:
    alembic stamp 001_baseline
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_baseline"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "articles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("source", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_articles"),
    )


def downgrade() -> None:
    op.drop_table("articles")
