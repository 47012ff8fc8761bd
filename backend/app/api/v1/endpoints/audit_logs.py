"""
Audit log API. Read-only; rows are written by the services.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.database import get_db
from app.core.exceptions import AuthorizationError
from app.modules.auth.dependencies import RequestContext, require_capability
from app.modules.auth.permissions import Scope
from app.schemas.audit import AuditLogResponse
from app.schemas.base import Page
from app.services.audit_service import audit_service

router = APIRouter()


@router.get("", response_model=Page[AuditLogResponse])
async def list_audit_logs(
    target_type: Optional[str] = Query(None, alias="targetType"),
    target_id: Optional[str] = Query(None, alias="targetId"),
    actor_id: Optional[str] = Query(None, alias="actorId"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    ctx: RequestContext = Depends(require_capability("can_view_reports")),
    db: AsyncSession = Depends(get_db)
):
    """Newest first. State-level reporting access only."""
    if ctx.scope is not Scope.STATE:
        raise AuthorizationError("Audit logs are available to state-level administrators only")

    logs, total = await audit_service.list_logs(
        db, target_type=target_type, target_id=target_id, actor_id=actor_id, limit=limit, offset=offset
    )
    return {"items": logs, "total": total}
