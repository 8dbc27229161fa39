"""
Biodex Backend — Profile SQLAlchemy Model
===========================================

What:  ORM model for the `profiles` table, one row per registered user.
Why:   The users list page shows every profile; the profile id is also the
       viewer identity that species rows reference in `author`.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from biodex.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    # Same value the viewer sends as X-Viewer-ID
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    biography: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, display_name='{self.display_name}')>"
