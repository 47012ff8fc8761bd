"""
Incident Service - reporting, responder assignment and lifecycle updates
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import List, Optional
import logging

from app.core.exceptions import IncidentNotFoundError, RecordAccessDeniedError, ValidationError
from app.core.types import generate_uuid
from app.models.incident import Incident, IncidentSeverity, IncidentStatus
from app.models.volunteer import Volunteer, VolunteerStatus
from app.modules.auth.dependencies import RequestContext
from app.modules.auth.scoping import is_visible, scope_records
from app.modules.workflows.incident_lifecycle import (
    ACTIVE_INCIDENT_STATUSES,
    advance_incident,
    attach_responders,
)
from app.modules.workflows.state_machine import parse_status
from app.schemas.incident import IncidentCreate, IncidentUpdate
from app.services.audit_service import audit_service

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("title", "description", "location", "latitude", "longitude")


class IncidentService:
    """Service for incidents"""

    async def list_incidents(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        status: Optional[str] = None,
        severity: Optional[str] = None,
        search: Optional[str] = None,
        active_only: bool = False,
    ) -> List[Incident]:
        query = select(Incident)

        if status:
            query = query.where(Incident.status == parse_status(IncidentStatus, status))
        if severity:
            query = query.where(Incident.severity == parse_status(IncidentSeverity, severity, "severity"))
        if active_only:
            query = query.where(Incident.status.in_(list(ACTIVE_INCIDENT_STATUSES)))
        if search and search.strip():
            term = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Incident.title.ilike(term),
                    Incident.description.ilike(term),
                    Incident.location.ilike(term),
                    Incident.district.ilike(term),
                )
            )

        result = await db.execute(query.order_by(Incident.created_at.desc()))
        return scope_records(result.scalars().all(), ctx.role, ctx.district)

    async def get_incident(self, db: AsyncSession, ctx: RequestContext, incident_id: str) -> Incident:
        """Fetch one incident; reporters always see their own reports"""
        incident = await db.get(Incident, incident_id)
        if incident is None:
            raise IncidentNotFoundError(incident_id)

        if str(incident.reported_by) != ctx.user_id and not is_visible(incident, ctx.role, ctx.district):
            raise RecordAccessDeniedError("Incident", incident_id)
        return incident

    async def report_incident(self, db: AsyncSession, ctx: RequestContext, data: IncidentCreate) -> Incident:
        """Any signed-in user may report; the incident starts as reported"""
        incident = Incident(
            id=generate_uuid(),
            reported_by=ctx.user_id,
            status=IncidentStatus.REPORTED,
            assigned_to=[],
            **data.model_dump(),
        )
        db.add(incident)
        audit_service.record(
            db,
            action="incident_reported",
            target_type="incident",
            target_id=incident.id,
            actor_id=ctx.user_id,
            district=incident.district,
            details={"severity": data.severity.value},
        )
        await db.commit()
        await db.refresh(incident)

        logger.info(f"Incident {incident.id} reported in {incident.district} ({incident.severity.value})")
        return incident

    async def _validate_responders(self, db: AsyncSession, ctx: RequestContext, volunteer_ids: List[str]) -> None:
        if not volunteer_ids:
            return
        result = await db.execute(select(Volunteer).where(Volunteer.id.in_(volunteer_ids)))
        found = {str(v.id): v for v in result.scalars().all()}

        for volunteer_id in volunteer_ids:
            volunteer = found.get(str(volunteer_id))
            if volunteer is None or not is_visible(volunteer, ctx.role, ctx.district):
                raise ValidationError(f"Unknown volunteer '{volunteer_id}'", field="assignedTo")
            if VolunteerStatus(volunteer.status) is not VolunteerStatus.APPROVED:
                raise ValidationError(f"Volunteer '{volunteer_id}' is not approved", field="assignedTo")

    async def update_incident(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        incident_id: str,
        data: IncidentUpdate,
        ip_address: Optional[str] = None,
    ) -> Incident:
        """
        Apply an admin update.

        Responders are attached first, which may advance a reported incident
        to assigned. An explicit status is then applied unless the incident
        is already there.
        """
        ctx.require("can_manage_incidents")

        incident = await db.get(Incident, incident_id)
        if incident is None:
            raise IncidentNotFoundError(incident_id)
        if not is_visible(incident, ctx.role, ctx.district):
            raise RecordAccessDeniedError("Incident", incident_id)

        changes = data.model_dump(exclude_unset=True)
        transitions = []

        if changes.get("severity") is not None and changes["severity"] != incident.severity:
            audit_service.record(
                db,
                action="incident_severity_changed",
                target_type="incident",
                target_id=incident.id,
                actor_id=ctx.user_id,
                district=incident.district,
                details={"from": IncidentSeverity(incident.severity).value, "to": changes["severity"].value},
            )
            incident.severity = changes["severity"]

        for field_name in _EDITABLE_FIELDS:
            if field_name in changes and changes[field_name] is not None:
                setattr(incident, field_name, changes[field_name])

        if changes.get("assigned_to") is not None:
            await self._validate_responders(db, ctx, changes["assigned_to"])
            transition = attach_responders(incident, changes["assigned_to"], actor_id=ctx.user_id)
            if transition:
                transitions.append(transition)

        if changes.get("status") is not None:
            target = parse_status(IncidentStatus, changes["status"])
            if target != incident.status:
                transitions.append(advance_incident(incident, target, actor_id=ctx.user_id))

        for transition in transitions:
            audit_service.record_transition(db, transition, district=incident.district, ip_address=ip_address)

        await db.commit()
        await db.refresh(incident)
        return incident


# Singleton instance
incident_service = IncidentService()
