"""
Biodex Backend — Profile Route Handlers
=========================================

What:  GET /api/profiles for the users list page (signed-in viewers only).
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from biodex.database import get_db_session
from biodex.dependencies import get_viewer_id
from biodex.schemas.common import ErrorResponse
from biodex.schemas.profile import ProfileListResponse
from biodex.services.profile_service import profile_service

router = APIRouter(prefix="/api", tags=["Profiles"])


@router.get(
    "/profiles",
    response_model=ProfileListResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="List user profiles",
)
async def list_profiles(
    response: Response,
    viewer_id: str = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileListResponse:
    result = await profile_service.list_profiles(db)
    response.headers["X-Total-Count"] = str(result.total_count)
    return result
