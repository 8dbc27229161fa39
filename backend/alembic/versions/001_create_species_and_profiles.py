"""Create species and profiles tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates `profiles` (one row per user) and `species` (owned by a profile id).
Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("biography", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "species",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "scientific_name",
            sa.Text(),
            nullable=False,
            comment="Binomial name, e.g. Cavia porcellus",
        ),
        sa.Column("common_name", sa.Text(), nullable=True),
        sa.Column("kingdom", sa.String(16), nullable=False),
        sa.Column("total_population", sa.Integer(), nullable=True),
        sa.Column(
            "image",
            sa.Text(),
            nullable=True,
            comment="Absolute URL of a picture of the species",
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("author", sa.String(64), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "kingdom IN ('Animalia', 'Plantae', 'Fungi', 'Protista', 'Archaea', 'Bacteria')",
            name="ck_species_kingdom",
        ),
        sa.CheckConstraint(
            "total_population IS NULL OR total_population >= 1",
            name="ck_species_total_population",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Ownership checks and "my species" lookups filter on author
    op.create_index("idx_species_author", "species", ["author"])


def downgrade() -> None:
    op.drop_index("idx_species_author", table_name="species")
    op.drop_table("species")
    op.drop_table("profiles")
