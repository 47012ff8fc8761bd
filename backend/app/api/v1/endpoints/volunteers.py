"""
Volunteer endpoints: self-registration, profile, listing and approval
"""
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.core.exceptions import VolunteerNotFoundError
from app.modules.auth.dependencies import RequestContext, get_client_ip, get_request_context
from app.schemas.volunteer import VolunteerCreate, VolunteerResponse, VolunteerStatusUpdate, VolunteerUpdate
from app.services.volunteer_service import volunteer_service

router = APIRouter()


@router.get("", response_model=List[VolunteerResponse])
async def list_volunteers(
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Volunteers in the caller's scope"""
    return await volunteer_service.list_volunteers(db, ctx, status=status_filter, search=search)


@router.post("", response_model=VolunteerResponse, status_code=status.HTTP_201_CREATED)
async def register_volunteer(
    data: VolunteerCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Submit the caller's volunteer application"""
    return await volunteer_service.register(db, ctx.user, data)


@router.get("/me", response_model=VolunteerResponse)
async def get_my_profile(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    profile = await volunteer_service.get_profile_for_user(db, ctx.user_id)
    if profile is None:
        raise VolunteerNotFoundError("me")
    return profile


@router.patch("/me", response_model=VolunteerResponse)
async def update_my_profile(
    data: VolunteerUpdate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Edit the caller's own profile; review status is untouched"""
    return await volunteer_service.update_own_profile(db, ctx.user, data)


@router.get("/{volunteer_id}", response_model=VolunteerResponse)
async def get_volunteer(
    volunteer_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await volunteer_service.get_volunteer(db, ctx, volunteer_id)


@router.patch("/{volunteer_id}/status", response_model=VolunteerResponse)
async def update_volunteer_status(
    volunteer_id: str,
    body: VolunteerStatusUpdate,
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Approve or reject a pending application"""
    return await volunteer_service.update_status(
        db,
        ctx,
        volunteer_id,
        body.status,
        rejection_reason=body.rejection_reason,
        ip_address=get_client_ip(request),
    )
