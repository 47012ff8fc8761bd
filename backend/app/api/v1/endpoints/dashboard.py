"""
Dashboard endpoints. Every figure is recomputed from the caller's scoped
records on each request.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.modules.auth.dependencies import RequestContext, get_request_context
from app.schemas.dashboard import DashboardSummary, DistrictStats, VolunteerDashboard
from app.services.dashboard_service import dashboard_service

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def get_summary(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Cards, charts and monthly trend for the caller's scope"""
    return await dashboard_service.summary(db, ctx)


@router.get("/districts", response_model=List[DistrictStats])
async def get_district_stats(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Per-district breakdown: all districts for state scope, own district for district scope"""
    return await dashboard_service.district_stats(db, ctx)


@router.get("/volunteer", response_model=VolunteerDashboard)
async def get_volunteer_dashboard(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await dashboard_service.volunteer_dashboard(db, ctx)
