"""Business Profile Routes — the sender block printed on every invoice."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.infrastructure.database import get_db
from faktur.schemas.business_profile import (
    BusinessProfileResponse, BusinessProfileUpsert,
)
from faktur.services.business_profile_service import BusinessProfileService

router = APIRouter(prefix="/api/v1/business-profile", tags=["business-profile"])


@router.get("", response_model=BusinessProfileResponse | None)
async def get_business_profile(db: AsyncSession = Depends(get_db)):
    return await BusinessProfileService(db).get_profile()


@router.put("", response_model=BusinessProfileResponse)
async def upsert_business_profile(
    body: BusinessProfileUpsert, db: AsyncSession = Depends(get_db),
):
    return await BusinessProfileService(db).upsert_profile(body)
