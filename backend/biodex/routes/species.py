"""
Biodex Backend — Species Route Handlers
=========================================

What:  List, read, update and delete species.
How:   Extracts path/body/viewer, delegates to SpeciesService, returns JSON.
Who:   Called by HttpDataStore (record cards) and the species list page.

Caching Strategy:
    Species are editable, so every response is `no-store`; a card that just
    refreshed must never be handed a stale copy.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from biodex.database import get_db_session
from biodex.dependencies import get_viewer_id
from biodex.schemas.common import ErrorResponse
from biodex.schemas.species import SpeciesForm, SpeciesListResponse, SpeciesRecord
from biodex.services.species_service import species_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Species"])

_WRITE_ERRORS = {
    401: {"description": "No viewer identity", "model": ErrorResponse},
    403: {"description": "Viewer does not own this species", "model": ErrorResponse},
    404: {"description": "Species not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "/species",
    response_model=SpeciesListResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="List species, newest first",
)
async def list_species(
    response: Response,
    viewer_id: str = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db_session),
) -> SpeciesListResponse:
    result = await species_service.list_species(db)
    response.headers["X-Total-Count"] = str(result.total_count)
    response.headers["Cache-Control"] = "no-store"
    return result


@router.get(
    "/species/{species_id}",
    response_model=SpeciesRecord,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a single species by ID",
)
async def get_species(
    species_id: int,
    response: Response,
    viewer_id: str = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db_session),
) -> SpeciesRecord:
    response.headers["Cache-Control"] = "no-store"
    return await species_service.get_species(db, species_id)


@router.patch(
    "/species/{species_id}",
    response_model=SpeciesRecord,
    responses={**_WRITE_ERRORS, 400: {"description": "Form validation failed", "model": ErrorResponse}},
    summary="Update a species you own",
    description=(
        "Replaces all six editable fields. Blank optional text is stored as null "
        "and names are trimmed. Only the species author may call this."
    ),
)
async def update_species(
    species_id: int,
    form: SpeciesForm,
    viewer_id: str = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db_session),
) -> SpeciesRecord:
    return await species_service.update_species(db, species_id, viewer_id, form)


@router.delete(
    "/species/{species_id}",
    status_code=204,
    responses=_WRITE_ERRORS,
    summary="Delete a species you own",
)
async def delete_species(
    species_id: int,
    viewer_id: str = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await species_service.delete_species(db, species_id, viewer_id)
    return Response(status_code=204)
