"""
Assignment endpoints
"""
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.modules.auth.dependencies import RequestContext, get_client_ip, get_request_context
from app.schemas.assignment import AssignmentCreate, AssignmentResponse, AssignmentStatusUpdate
from app.services.assignment_service import assignment_service

router = APIRouter()


@router.post("/assignments", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    data: AssignmentCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Assign an approved volunteer to an incident or training session"""
    return await assignment_service.create_assignment(db, ctx, data)


@router.get("/assignments", response_model=List[AssignmentResponse])
async def list_assignments(
    status_filter: Optional[str] = Query(None, alias="status"),
    incident_id: Optional[str] = Query(None, alias="incidentId"),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await assignment_service.list_assignments(db, ctx, status=status_filter, incident_id=incident_id)


@router.get("/my-assignments", response_model=List[AssignmentResponse])
async def list_my_assignments(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await assignment_service.my_assignments(db, ctx)


@router.patch("/assignments/{assignment_id}/status", response_model=AssignmentResponse)
async def update_assignment_status(
    assignment_id: str,
    body: AssignmentStatusUpdate,
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Progress update by the assigned volunteer"""
    return await assignment_service.update_status(
        db,
        ctx,
        assignment_id,
        body.status,
        notes=body.notes,
        ip_address=get_client_ip(request),
    )
