"""
Biodex Backend — Species Service
==================================

What:  Business logic for listing, reading, updating and deleting species.
Who:   Called by the species routes and by SqlDataStore.

Ownership:
    update_species() and delete_species() compare the row's `author` with
    the viewer identity before touching anything. This is the authoritative
    check; the card's hidden controls are only a convenience.

Design Decision:
    SpeciesService is stateless. It receives the session for each call, so
    tests can hand it an AsyncMock and each request keeps its own transaction.
"""

import logging

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from biodex.exceptions import DatabaseError, NotFoundError, PermissionDeniedError
from biodex.models.species import Species
from biodex.schemas.species import SpeciesForm, SpeciesListResponse, SpeciesRecord

logger = logging.getLogger(__name__)


class SpeciesService:
    """
    Responsibilities:
        - list_species(): every species, newest first
        - get_species(): single species with not-found handling
        - update_species(): owner-only full rewrite of the six editable fields
        - delete_species(): owner-only removal

    Error Handling Strategy:
        Our own exceptions propagate unchanged. Anything else coming out of
        SQLAlchemy is logged and wrapped in DatabaseError.
    """

    async def list_species(self, db: AsyncSession) -> SpeciesListResponse:
        try:
            result = await db.execute(select(Species).order_by(desc(Species.id)))
            rows = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing species: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve species. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return SpeciesListResponse(
            species=[SpeciesRecord.model_validate(row) for row in rows],
            total_count=len(rows),
        )

    async def get_species(self, db: AsyncSession, species_id: int) -> SpeciesRecord:
        row = await self._load(db, species_id)
        return SpeciesRecord.model_validate(row)

    async def update_species(
        self,
        db: AsyncSession,
        species_id: int,
        viewer_id: str,
        form: SpeciesForm,
    ) -> SpeciesRecord:
        """
        Rewrite all six editable fields of a species owned by `viewer_id`.

        `id` and `author` are never part of the patch, so they cannot change
        here whatever the caller sends.

        Raises:
            NotFoundError: no species with this id (→ 404)
            PermissionDeniedError: viewer is not the author (→ 403)
            DatabaseError: flush failed (→ 500)
        """
        row = await self._load(db, species_id)
        self._require_owner(row, viewer_id)

        for field, value in form.to_patch().items():
            setattr(row, field, value)

        try:
            await db.flush()
        except Exception as e:
            logger.error("Database error updating species %s: %s", species_id, str(e))
            raise DatabaseError(
                message="Could not update the species. Please try again.",
                context={"species_id": species_id, "error_type": type(e).__name__},
            )

        logger.info("Species %s updated by %s", species_id, viewer_id)
        return SpeciesRecord.model_validate(row)

    async def delete_species(self, db: AsyncSession, species_id: int, viewer_id: str) -> None:
        """
        Remove a species owned by `viewer_id`.

        Raises:
            NotFoundError: no species with this id (→ 404)
            PermissionDeniedError: viewer is not the author (→ 403)
            DatabaseError: delete failed (→ 500)
        """
        row = await self._load(db, species_id)
        self._require_owner(row, viewer_id)

        try:
            await db.delete(row)
            await db.flush()
        except Exception as e:
            logger.error("Database error deleting species %s: %s", species_id, str(e))
            raise DatabaseError(
                message="Could not delete the species. Please try again.",
                context={"species_id": species_id, "error_type": type(e).__name__},
            )

        logger.info("Species %s deleted by %s", species_id, viewer_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _load(self, db: AsyncSession, species_id: int) -> Species:
        try:
            result = await db.execute(select(Species).where(Species.id == species_id))
            row = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching species %s: %s", species_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the species. Please try again.",
                context={"species_id": species_id},
            )

        if row is None:
            raise NotFoundError(resource="species", resource_id=str(species_id))
        return row

    @staticmethod
    def _require_owner(row: Species, viewer_id: str) -> None:
        if row.author != viewer_id:
            logger.warning(
                "Viewer %s attempted to modify species %s owned by %s",
                viewer_id, row.id, row.author,
            )
            raise PermissionDeniedError(resource="species", resource_id=str(row.id))


species_service = SpeciesService()
