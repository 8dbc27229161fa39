"""
Biodex Backend — Species SQLAlchemy Model
===========================================

What:  ORM model representing the `species` table.
Who:   Used by SpeciesService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - Integer primary key: assigned by the database, never changed afterwards
    - author: identifier of the viewer who created the row; ownership checks
      compare against it and no update path writes to it
    - kingdom: VARCHAR with a CHECK constraint instead of a native ENUM so the
      same model works on PostgreSQL and SQLite
    - Nullable text columns hold NULL for "absent", never an empty string
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from biodex.database import Base

KINGDOMS = ("Animalia", "Plantae", "Fungi", "Protista", "Archaea", "Bacteria")


class Species(Base):
    """
    A species entry contributed by a signed-in user.

    Lifecycle:
        1. Created outside the card (seed data or another client)
        2. Updated by its author: the six editable fields are rewritten together
        3. Deleted by its author
    """

    __tablename__ = "species"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    scientific_name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Binomial name, e.g. Cavia porcellus",
    )
    common_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    kingdom: Mapped[str] = mapped_column(String(16), nullable=False)
    total_population: Mapped[int | None] = mapped_column(Integer, nullable=True)
    image: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Absolute URL of a picture of the species",
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Owner identity. Set once at creation.
    author: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        CheckConstraint(
            "kingdom IN ({})".format(", ".join(f"'{k}'" for k in KINGDOMS)),
            name="ck_species_kingdom",
        ),
        CheckConstraint(
            "total_population IS NULL OR total_population >= 1",
            name="ck_species_total_population",
        ),
        Index("idx_species_author", "author"),
    )

    def __repr__(self) -> str:
        return f"<Species(id={self.id}, scientific_name='{self.scientific_name}', author='{self.author}')>"
