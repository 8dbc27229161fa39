"""
Biodex Backend — Profile Schemas
==================================

What:  Response models for the users list.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ProfileRecord(BaseModel):
    id: str = Field(description="User identifier")
    email: str
    display_name: str
    biography: Optional[str] = None

    model_config = {"from_attributes": True}


class ProfileListResponse(BaseModel):
    profiles: List[ProfileRecord] = Field(description="Profiles, ordered by id descending")
    total_count: int
