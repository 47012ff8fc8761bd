"""
Training session endpoints: scheduling, status and registrations
"""
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List, Optional

from app.core.database import get_db
from app.models.training import TrainingSession
from app.modules.auth.dependencies import RequestContext, get_client_ip, get_request_context
from app.schemas.training import (
    MyTrainingResponse,
    TrainingRegistrationResponse,
    TrainingSessionCreate,
    TrainingSessionResponse,
    TrainingSessionUpdate,
    TrainingStatusUpdate,
)
from app.services.training_service import training_service

router = APIRouter()


def _session_response(session: TrainingSession, counts: Dict[str, int]) -> TrainingSessionResponse:
    registered = counts.get(str(session.id), 0)
    response = TrainingSessionResponse.model_validate(session)
    response.registered_count = registered
    response.seats_left = max(session.capacity - registered, 0)
    return response


async def _with_counts(db: AsyncSession, sessions: List[TrainingSession]) -> List[TrainingSessionResponse]:
    counts = await training_service.confirmed_counts(db, [str(s.id) for s in sessions])
    return [_session_response(s, counts) for s in sessions]


@router.get("/trainings", response_model=List[TrainingSessionResponse])
async def list_trainings(
    status_filter: Optional[str] = Query(None, alias="status"),
    upcoming: bool = False,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Sessions for the caller's district plus statewide sessions"""
    sessions = await training_service.list_sessions(db, ctx, status=status_filter, upcoming_only=upcoming)
    return await _with_counts(db, sessions)


@router.post("/trainings", response_model=TrainingSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_training(
    data: TrainingSessionCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    session = await training_service.create_session(db, ctx, data)
    return _session_response(session, {})


@router.get("/trainings/{session_id}", response_model=TrainingSessionResponse)
async def get_training(
    session_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    session = await training_service.get_session(db, ctx, session_id)
    return (await _with_counts(db, [session]))[0]


@router.patch("/trainings/{session_id}", response_model=TrainingSessionResponse)
async def update_training(
    session_id: str,
    data: TrainingSessionUpdate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    session = await training_service.update_session(db, ctx, session_id, data)
    return (await _with_counts(db, [session]))[0]


@router.patch("/trainings/{session_id}/status", response_model=TrainingSessionResponse)
async def update_training_status(
    session_id: str,
    body: TrainingStatusUpdate,
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Mark a scheduled session completed or cancelled"""
    session = await training_service.change_status(
        db, ctx, session_id, body.status, ip_address=get_client_ip(request)
    )
    return (await _with_counts(db, [session]))[0]


# ==================== Registrations ====================

@router.post("/trainings/{session_id}/register", response_model=TrainingRegistrationResponse,
             status_code=status.HTTP_201_CREATED)
async def register_for_training(
    session_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await training_service.register(db, ctx, session_id)


@router.delete("/trainings/{session_id}/register", response_model=TrainingRegistrationResponse)
async def cancel_training_registration(
    session_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await training_service.cancel_registration(db, ctx, session_id)


@router.get("/trainings/{session_id}/registrations", response_model=List[TrainingRegistrationResponse])
async def list_training_registrations(
    session_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await training_service.list_registrations(db, ctx, session_id)


@router.get("/my-trainings", response_model=List[MyTrainingResponse])
async def list_my_trainings(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """The caller's active registrations with their sessions"""
    rows = await training_service.my_registrations(db, ctx)
    sessions = await _with_counts(db, [session for _, session in rows])
    return [
        {"registration": registration, "session": session}
        for (registration, _), session in zip(rows, sessions)
    ]
