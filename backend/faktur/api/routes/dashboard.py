"""Dashboard Routes — headline stats, revenue trend, status mix, recent activity."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.api.dependencies import get_now
from faktur.config import get_settings
from faktur.infrastructure.database import get_db
from faktur.schemas.dashboard import (
    DashboardStatsResponse, RecentActivityItem, RevenuePoint, StatusBucket,
)
from faktur.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    db: AsyncSession = Depends(get_db), now: datetime = Depends(get_now),
):
    return await DashboardService(db).stats(now)


@router.get("/revenue", response_model=list[RevenuePoint])
async def revenue(
    months: int | None = Query(None, ge=1, le=24),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    months = months or get_settings().dashboard_default_months
    return await DashboardService(db).revenue(now, months)


@router.get("/status-distribution", response_model=list[StatusBucket])
async def status_distribution(
    db: AsyncSession = Depends(get_db), now: datetime = Depends(get_now),
):
    return await DashboardService(db).status_breakdown(now)


@router.get("/recent-activity", response_model=list[RecentActivityItem])
async def recent_activity(
    limit: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    return await DashboardService(db).recent_activity(now, limit)
