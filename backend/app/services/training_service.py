"""
Training Service - session scheduling and volunteer registrations

Visibility differs from other records: a session with no district is
statewide and visible everywhere. District admins see their district plus
statewide sessions; volunteers see their profile district plus statewide.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from datetime import datetime
from typing import Dict, List, Optional, Tuple
import logging

from app.core.config import settings
from app.core.exceptions import (
    AuthorizationError,
    ProfileRequiredError,
    RecordAccessDeniedError,
    ResourceNotFoundError,
    StateConflictError,
    TrainingSessionNotFoundError,
    ValidationError,
)
from app.core.types import generate_uuid
from app.models.reference import Department
from app.models.training import RegistrationStatus, TrainingRegistration, TrainingSession, TrainingStatus
from app.models.volunteer import Volunteer
from app.modules.auth.dependencies import RequestContext
from app.modules.auth.permissions import Scope
from app.modules.workflows.state_machine import parse_status
from app.modules.workflows.training_schedule import (
    change_training_status,
    ensure_can_register,
    is_open_to_district,
)
from app.schemas.training import TrainingSessionCreate, TrainingSessionUpdate
from app.services.audit_service import audit_service
from app.services.volunteer_service import volunteer_service

logger = logging.getLogger(__name__)


class TrainingService:
    """Service for training sessions"""

    async def _viewer_district(self, db: AsyncSession, ctx: RequestContext) -> Tuple[bool, Optional[str]]:
        """(sees_everything, district) for the caller"""
        if ctx.scope is Scope.STATE:
            return True, None
        if ctx.scope is Scope.DISTRICT:
            return False, ctx.district
        profile = await volunteer_service.get_profile_for_user(db, ctx.user_id)
        return False, profile.district if profile else None

    async def visible_sessions(self, sessions: List[TrainingSession], db: AsyncSession,
                               ctx: RequestContext) -> List[TrainingSession]:
        sees_all, district = await self._viewer_district(db, ctx)
        if sees_all:
            return list(sessions)
        return [s for s in sessions if is_open_to_district(s, district)]

    async def confirmed_counts(self, db: AsyncSession, session_ids: List[str]) -> Dict[str, int]:
        if not session_ids:
            return {}
        result = await db.execute(
            select(TrainingRegistration.training_session_id, func.count(TrainingRegistration.id))
            .where(
                TrainingRegistration.training_session_id.in_(session_ids),
                TrainingRegistration.status != RegistrationStatus.CANCELLED,
            )
            .group_by(TrainingRegistration.training_session_id)
        )
        return {str(session_id): count for session_id, count in result.all()}

    async def list_sessions(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        status: Optional[str] = None,
        upcoming_only: bool = False,
        now: Optional[datetime] = None,
    ) -> List[TrainingSession]:
        query = select(TrainingSession)
        if status:
            query = query.where(TrainingSession.status == parse_status(TrainingStatus, status))
        if upcoming_only:
            query = query.where(
                TrainingSession.status == TrainingStatus.SCHEDULED,
                TrainingSession.scheduled_at > (now or datetime.utcnow()),
            )

        result = await db.execute(query.order_by(TrainingSession.scheduled_at))
        return await self.visible_sessions(result.scalars().all(), db, ctx)

    async def get_session(self, db: AsyncSession, ctx: RequestContext, session_id: str) -> TrainingSession:
        session = await db.get(TrainingSession, session_id)
        if session is None:
            raise TrainingSessionNotFoundError(session_id)
        if not await self.visible_sessions([session], db, ctx):
            raise RecordAccessDeniedError("TrainingSession", session_id)
        return session

    async def _check_department(self, db: AsyncSession, department_id: Optional[str]) -> None:
        if department_id and await db.get(Department, department_id) is None:
            raise ValidationError(f"Unknown department '{department_id}'", field="departmentId")

    async def create_session(self, db: AsyncSession, ctx: RequestContext, data: TrainingSessionCreate) -> TrainingSession:
        ctx.require("can_approve_volunteers")
        await self._check_department(db, data.department_id)

        district = data.district
        if ctx.scope is Scope.DISTRICT:
            if not ctx.district:
                raise AuthorizationError("District administrators need an assigned district to schedule training")
            if district is None:
                district = ctx.district
            elif district != ctx.district:
                raise AuthorizationError("District administrators can only schedule training in their own district")

        values = data.model_dump(exclude={"district", "capacity"})
        session = TrainingSession(
            id=generate_uuid(),
            district=district,
            capacity=data.capacity or settings.DEFAULT_TRAINING_CAPACITY,
            status=TrainingStatus.SCHEDULED,
            created_by=ctx.user_id,
            **values,
        )
        db.add(session)
        audit_service.record(
            db,
            action="training_scheduled",
            target_type="trainingsession",
            target_id=session.id,
            actor_id=ctx.user_id,
            district=district,
            details={"title": session.title, "scheduled_at": session.scheduled_at.isoformat()},
        )
        await db.commit()
        await db.refresh(session)

        logger.info(f"Training '{session.title}' scheduled for {district or 'statewide'}")
        return session

    async def update_session(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        session_id: str,
        data: TrainingSessionUpdate,
    ) -> TrainingSession:
        ctx.require("can_approve_volunteers")
        session = await self.get_session(db, ctx, session_id)
        self._ensure_manageable(ctx, session)

        if TrainingStatus(session.status) is not TrainingStatus.SCHEDULED:
            raise StateConflictError(f"A {TrainingStatus(session.status).value} session cannot be edited")

        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        await self._check_department(db, changes.get("department_id"))

        if "capacity" in changes:
            taken = (await self.confirmed_counts(db, [str(session.id)])).get(str(session.id), 0)
            if changes["capacity"] < taken:
                raise ValidationError(
                    f"Capacity cannot be lower than the {taken} confirmed registrations",
                    field="capacity",
                )

        for field_name, value in changes.items():
            setattr(session, field_name, value)

        await db.commit()
        await db.refresh(session)
        return session

    def _ensure_manageable(self, ctx: RequestContext, session: TrainingSession) -> None:
        # Statewide sessions belong to state-level administrators
        if ctx.scope is Scope.DISTRICT and (not ctx.district or session.district != ctx.district):
            raise AuthorizationError("Statewide sessions are managed by state administrators")

    async def change_status(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        session_id: str,
        status: str,
        ip_address: Optional[str] = None,
    ) -> TrainingSession:
        ctx.require("can_approve_volunteers")
        session = await self.get_session(db, ctx, session_id)
        self._ensure_manageable(ctx, session)

        transition = change_training_status(session, status, actor_id=ctx.user_id)
        audit_service.record_transition(db, transition, district=session.district, ip_address=ip_address)

        await db.commit()
        await db.refresh(session)
        return session

    # ==================== REGISTRATIONS ====================

    async def _require_profile(self, db: AsyncSession, ctx: RequestContext) -> Volunteer:
        profile = await volunteer_service.get_profile_for_user(db, ctx.user_id)
        if profile is None:
            raise ProfileRequiredError()
        return profile

    async def _find_registration(self, db: AsyncSession, session_id: str,
                                 volunteer_id: str) -> Optional[TrainingRegistration]:
        result = await db.execute(
            select(TrainingRegistration).where(
                TrainingRegistration.training_session_id == session_id,
                TrainingRegistration.volunteer_id == volunteer_id,
            )
        )
        return result.scalar_one_or_none()

    async def register(self, db: AsyncSession, ctx: RequestContext, session_id: str) -> TrainingRegistration:
        """Reserve a seat for the caller's volunteer profile"""
        profile = await self._require_profile(db, ctx)

        session = await db.get(TrainingSession, session_id)
        if session is None:
            raise TrainingSessionNotFoundError(session_id)
        if not is_open_to_district(session, profile.district):
            raise RecordAccessDeniedError("TrainingSession", session_id)

        existing = await self._find_registration(db, session_id, str(profile.id))
        taken = (await self.confirmed_counts(db, [session_id])).get(session_id, 0)
        ensure_can_register(session, existing, taken)

        if existing is not None:
            existing.status = RegistrationStatus.CONFIRMED
            existing.registered_at = datetime.utcnow()
            registration = existing
        else:
            registration = TrainingRegistration(
                id=generate_uuid(),
                training_session_id=session_id,
                volunteer_id=profile.id,
                status=RegistrationStatus.CONFIRMED,
            )
            db.add(registration)

        audit_service.record(
            db,
            action="training_registered",
            target_type="trainingsession",
            target_id=session_id,
            actor_id=ctx.user_id,
            district=profile.district,
            details={"volunteer_id": str(profile.id)},
        )
        await db.commit()
        await db.refresh(registration)
        return registration

    async def cancel_registration(self, db: AsyncSession, ctx: RequestContext, session_id: str) -> TrainingRegistration:
        profile = await self._require_profile(db, ctx)
        registration = await self._find_registration(db, session_id, str(profile.id))
        if registration is None or RegistrationStatus(registration.status) is RegistrationStatus.CANCELLED:
            raise ResourceNotFoundError("TrainingRegistration", session_id)

        registration.status = RegistrationStatus.CANCELLED
        audit_service.record(
            db,
            action="training_registration_cancelled",
            target_type="trainingsession",
            target_id=session_id,
            actor_id=ctx.user_id,
            district=profile.district,
            details={"volunteer_id": str(profile.id)},
        )
        await db.commit()
        await db.refresh(registration)
        return registration

    async def list_registrations(self, db: AsyncSession, ctx: RequestContext,
                                 session_id: str) -> List[TrainingRegistration]:
        ctx.require("can_approve_volunteers")
        await self.get_session(db, ctx, session_id)
        result = await db.execute(
            select(TrainingRegistration)
            .where(TrainingRegistration.training_session_id == session_id)
            .order_by(TrainingRegistration.registered_at)
        )
        return list(result.scalars().all())

    async def my_registrations(self, db: AsyncSession, ctx: RequestContext) -> List[Tuple[TrainingRegistration, TrainingSession]]:
        profile = await volunteer_service.get_profile_for_user(db, ctx.user_id)
        if profile is None:
            return []
        result = await db.execute(
            select(TrainingRegistration, TrainingSession)
            .join(TrainingSession, TrainingSession.id == TrainingRegistration.training_session_id)
            .where(
                TrainingRegistration.volunteer_id == profile.id,
                TrainingRegistration.status != RegistrationStatus.CANCELLED,
            )
            .order_by(TrainingSession.scheduled_at)
        )
        return [(registration, session) for registration, session in result.all()]


# Singleton instance
training_service = TrainingService()
