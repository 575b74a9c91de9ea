"""Business Profile Service — single-row sender profile.

Invariants:
    - At most one BusinessProfile row; upsert updates it in place or creates it
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.models.business_profile import BusinessProfile
from faktur.schemas.business_profile import BusinessProfileUpsert

logger = logging.getLogger(__name__)


class BusinessProfileService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self) -> BusinessProfile | None:
        result = await self.db.execute(select(BusinessProfile).limit(1))
        return result.scalar_one_or_none()

    async def upsert_profile(self, data: BusinessProfileUpsert) -> BusinessProfile:
        profile = await self.get_profile()
        if profile is None:
            profile = BusinessProfile(**data.model_dump())
            self.db.add(profile)
            logger.info("Business profile created")
        else:
            for field, value in data.model_dump().items():
                setattr(profile, field, value)
            profile.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(profile)
        return profile
