"""
Biodex Backend — Profile Service
==================================

What:  Read access to user profiles for the users list.
"""

import logging

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from biodex.exceptions import DatabaseError
from biodex.models.profile import Profile
from biodex.schemas.profile import ProfileListResponse, ProfileRecord

logger = logging.getLogger(__name__)


class ProfileService:

    async def list_profiles(self, db: AsyncSession) -> ProfileListResponse:
        """All profiles, highest id first."""
        try:
            result = await db.execute(select(Profile).order_by(desc(Profile.id)))
            rows = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing profiles: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve profiles. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return ProfileListResponse(
            profiles=[ProfileRecord.model_validate(row) for row in rows],
            total_count=len(rows),
        )


profile_service = ProfileService()
