"""
Audit Service - records workflow transitions and administrative changes

Rows are added to the caller's session and committed together with the
change they describe.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Any, Dict, List, Optional, Tuple

from app.core.logging_config import logger
from app.models.audit_log import AuditLog
from app.modules.workflows.state_machine import StateTransition


class AuditService:
    """Writes and queries the audit trail"""

    def record(
        self,
        db: AsyncSession,
        action: str,
        target_type: str,
        target_id: Optional[str] = None,
        actor_id: Optional[str] = None,
        district: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        entry = AuditLog(
            actor_id=actor_id,
            action=action,
            target_type=target_type,
            target_id=target_id,
            district=district,
            details=details or {},
            ip_address=ip_address,
            user_agent=user_agent,
        )
        db.add(entry)
        return entry

    def record_transition(
        self,
        db: AsyncSession,
        transition: StateTransition,
        district: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> AuditLog:
        """Audit row plus structured log line for a status change"""
        logger.log_workflow_event(
            transition.entity,
            transition.entity_id,
            transition.from_state,
            transition.to_state,
            actor_id=transition.actor_id,
        )
        details: Dict[str, Any] = {"from": transition.from_state, "to": transition.to_state}
        if transition.reason:
            details["reason"] = transition.reason
        if transition.metadata:
            details.update(transition.metadata)
        return self.record(
            db,
            action=f"{transition.entity.lower()}_{transition.to_state}",
            target_type=transition.entity.lower(),
            target_id=transition.entity_id,
            actor_id=transition.actor_id,
            district=district,
            details=details,
            ip_address=ip_address,
        )

    async def list_logs(
        self,
        db: AsyncSession,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
        actor_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[AuditLog], int]:
        query = select(AuditLog)
        count_query = select(func.count(AuditLog.id))

        filters = []
        if target_type:
            filters.append(AuditLog.target_type == target_type)
        if target_id:
            filters.append(AuditLog.target_id == target_id)
        if actor_id:
            filters.append(AuditLog.actor_id == actor_id)
        if filters:
            query = query.where(*filters)
            count_query = count_query.where(*filters)

        total = await db.scalar(count_query) or 0
        result = await db.execute(
            query.order_by(AuditLog.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total


# Singleton instance
audit_service = AuditService()
