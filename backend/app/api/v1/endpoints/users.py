"""
User administration API

Listing and role/district/active changes, restricted to callers with
can_manage_users. Every change is written to the audit log.
"""
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.database import get_db
from app.models.user import UserRole
from app.modules.auth.dependencies import RequestContext, get_client_ip, get_request_context
from app.schemas.auth import UserResponse
from app.schemas.base import Page
from app.schemas.user import UserAdminUpdate
from app.services.user_service import user_service

router = APIRouter()


@router.get("", response_model=Page[UserResponse])
async def list_users(
    role: Optional[UserRole] = None,
    district: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    users, total = await user_service.list_users(
        db, ctx, role=role, district=district, search=search, limit=limit, offset=offset
    )
    return {"items": users, "total": total}


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserAdminUpdate,
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Change a user's role, district or active flag"""
    return await user_service.update_user(db, ctx, user_id, data, ip_address=get_client_ip(request))
