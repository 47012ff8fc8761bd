"""
Assignment Service - duties handed to volunteers and their progress

Assignments have no district of their own; they are scoped through the
assigned volunteer's district.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional
import logging

from app.core.exceptions import (
    AssignmentNotFoundError,
    IncidentNotFoundError,
    RecordAccessDeniedError,
    StateConflictError,
    ValidationError,
    VolunteerNotFoundError,
)
from app.core.types import generate_uuid
from app.models.assignment import Assignment, AssignmentStatus
from app.models.incident import Incident
from app.models.training import TrainingStatus
from app.models.volunteer import Volunteer, VolunteerStatus
from app.modules.auth.dependencies import RequestContext
from app.modules.auth.scoping import is_visible, scope_records
from app.modules.workflows.assignment_lifecycle import advance_assignment
from app.modules.workflows.incident_lifecycle import is_active_incident
from app.modules.workflows.state_machine import parse_status
from app.modules.workflows.training_schedule import is_open_to_district
from app.schemas.assignment import AssignmentCreate
from app.services.audit_service import audit_service
from app.services.training_service import training_service
from app.services.volunteer_service import volunteer_service

logger = logging.getLogger(__name__)


class AssignmentService:
    """Service for volunteer assignments"""

    async def create_assignment(self, db: AsyncSession, ctx: RequestContext, data: AssignmentCreate) -> Assignment:
        ctx.require("can_manage_incidents")

        volunteer = await db.get(Volunteer, data.volunteer_id)
        if volunteer is None:
            raise VolunteerNotFoundError(data.volunteer_id)
        if not is_visible(volunteer, ctx.role, ctx.district):
            raise RecordAccessDeniedError("Volunteer", data.volunteer_id)
        if VolunteerStatus(volunteer.status) is not VolunteerStatus.APPROVED:
            raise ValidationError("Only approved volunteers can be assigned", field="volunteerId")

        if data.incident_id:
            # Scope only; reporters get no exemption here, unlike get_incident
            incident = await db.get(Incident, data.incident_id)
            if incident is None:
                raise IncidentNotFoundError(data.incident_id)
            if not is_visible(incident, ctx.role, ctx.district):
                raise RecordAccessDeniedError("Incident", data.incident_id)
            if not is_active_incident(incident):
                raise StateConflictError(f"Incident is {incident.status.value} and no longer takes assignments")

        if data.training_session_id:
            session = await training_service.get_session(db, ctx, data.training_session_id)
            if TrainingStatus(session.status) is not TrainingStatus.SCHEDULED:
                raise StateConflictError(f"Training session is {session.status.value}")
            if not is_open_to_district(session, volunteer.district):
                raise ValidationError("Volunteer's district is not covered by this session", field="trainingSessionId")

        assignment = Assignment(
            id=generate_uuid(),
            volunteer_id=volunteer.id,
            incident_id=data.incident_id,
            training_session_id=data.training_session_id,
            role=data.role,
            notes=data.notes,
            status=AssignmentStatus.ASSIGNED,
            assigned_by=ctx.user_id,
        )
        db.add(assignment)
        audit_service.record(
            db,
            action="assignment_created",
            target_type="assignment",
            target_id=assignment.id,
            actor_id=ctx.user_id,
            district=volunteer.district,
            details={
                "volunteer_id": str(volunteer.id),
                "incident_id": data.incident_id,
                "training_session_id": data.training_session_id,
            },
        )
        await db.commit()
        await db.refresh(assignment)

        logger.info(f"Assignment {assignment.id} created for volunteer {volunteer.id}")
        return assignment

    async def list_assignments(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        status: Optional[str] = None,
        incident_id: Optional[str] = None,
    ) -> List[Assignment]:
        query = select(Assignment, Volunteer.district).join(Volunteer, Volunteer.id == Assignment.volunteer_id)
        if status:
            query = query.where(Assignment.status == parse_status(AssignmentStatus, status))
        if incident_id:
            query = query.where(Assignment.incident_id == incident_id)

        result = await db.execute(query.order_by(Assignment.assigned_at.desc()))
        rows = [{"district": district, "assignment": assignment} for assignment, district in result.all()]
        return [row["assignment"] for row in scope_records(rows, ctx.role, ctx.district)]

    async def my_assignments(self, db: AsyncSession, ctx: RequestContext) -> List[Assignment]:
        profile = await volunteer_service.get_profile_for_user(db, ctx.user_id)
        if profile is None:
            return []
        result = await db.execute(
            select(Assignment)
            .where(Assignment.volunteer_id == profile.id)
            .order_by(Assignment.assigned_at.desc())
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        assignment_id: str,
        status: str,
        notes: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Assignment:
        """Progress update from the assigned volunteer"""
        assignment = await db.get(Assignment, assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(assignment_id)

        profile = await volunteer_service.get_profile_for_user(db, ctx.user_id)
        transition = advance_assignment(
            assignment,
            status,
            caller_volunteer_id=str(profile.id) if profile else None,
            actor_id=ctx.user_id,
        )
        if notes is not None:
            assignment.notes = notes

        audit_service.record_transition(
            db,
            transition,
            district=profile.district if profile else None,
            ip_address=ip_address,
        )
        await db.commit()
        await db.refresh(assignment)
        return assignment


# Singleton instance
assignment_service = AssignmentService()
