"""
Volunteer Service - registration, profile edits and application review
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import List, Optional
import logging

from app.core.exceptions import (
    DuplicateResourceError,
    RecordAccessDeniedError,
    VolunteerNotFoundError,
)
from app.core.types import generate_uuid
from app.models.user import User
from app.models.volunteer import Volunteer, VolunteerStatus
from app.modules.auth.dependencies import RequestContext
from app.modules.auth.scoping import is_visible, scope_records
from app.modules.workflows.state_machine import parse_status
from app.modules.workflows.volunteer_approval import decide_application
from app.schemas.volunteer import VolunteerCreate, VolunteerUpdate
from app.services.audit_service import audit_service

logger = logging.getLogger(__name__)


class VolunteerService:
    """Service for volunteer profiles"""

    # Columns a profile edit may change but never clear
    REQUIRED_PROFILE_FIELDS = frozenset({"full_name", "phone", "is_ex_serviceman", "skills"})

    async def get_profile_for_user(self, db: AsyncSession, user_id: str) -> Optional[Volunteer]:
        result = await db.execute(select(Volunteer).where(Volunteer.user_id == user_id))
        return result.scalar_one_or_none()

    async def list_volunteers(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Volunteer]:
        """Volunteers visible to the caller, newest first"""
        query = select(Volunteer)

        if status:
            query = query.where(Volunteer.status == parse_status(VolunteerStatus, status))

        if search and search.strip():
            term = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Volunteer.full_name.ilike(term),
                    Volunteer.email.ilike(term),
                    Volunteer.phone.ilike(term),
                    Volunteer.district.ilike(term),
                )
            )

        result = await db.execute(query.order_by(Volunteer.created_at.desc()))
        return scope_records(result.scalars().all(), ctx.role, ctx.district)

    async def get_volunteer(self, db: AsyncSession, ctx: RequestContext, volunteer_id: str) -> Volunteer:
        """Fetch one volunteer; callers always see their own profile"""
        volunteer = await db.get(Volunteer, volunteer_id)
        if volunteer is None:
            raise VolunteerNotFoundError(volunteer_id)

        if str(volunteer.user_id) != ctx.user_id and not is_visible(volunteer, ctx.role, ctx.district):
            raise RecordAccessDeniedError("Volunteer", volunteer_id)

        return volunteer

    async def register(self, db: AsyncSession, user: User, data: VolunteerCreate) -> Volunteer:
        """Submit the caller's application; it starts pending"""
        if await self.get_profile_for_user(db, str(user.id)):
            raise DuplicateResourceError("You have already registered as a volunteer", field="userId")

        volunteer = Volunteer(
            id=generate_uuid(),
            user_id=user.id,
            status=VolunteerStatus.PENDING,
            **data.model_dump(),
        )
        if not volunteer.email:
            volunteer.email = user.email

        db.add(volunteer)
        audit_service.record(
            db,
            action="volunteer_registered",
            target_type="volunteer",
            target_id=volunteer.id,
            actor_id=str(user.id),
            district=data.district,
        )
        await db.commit()
        await db.refresh(volunteer)

        logger.info(f"Volunteer application {volunteer.id} submitted for {volunteer.district}")
        return volunteer

    async def update_own_profile(self, db: AsyncSession, user: User, data: VolunteerUpdate) -> Volunteer:
        volunteer = await self.get_profile_for_user(db, str(user.id))
        if volunteer is None:
            raise VolunteerNotFoundError("me")

        changes = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k not in self.REQUIRED_PROFILE_FIELDS
        }
        for field_name, value in changes.items():
            if field_name == "skills":
                value = [s.strip() for s in value if s and s.strip()]
            setattr(volunteer, field_name, value)

        await db.commit()
        await db.refresh(volunteer)
        return volunteer

    async def update_status(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        volunteer_id: str,
        status: str,
        rejection_reason: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Volunteer:
        """Approve or reject an application within the reviewer's scope"""
        ctx.require("can_approve_volunteers")

        volunteer = await db.get(Volunteer, volunteer_id)
        if volunteer is None:
            raise VolunteerNotFoundError(volunteer_id)
        if not is_visible(volunteer, ctx.role, ctx.district):
            raise RecordAccessDeniedError("Volunteer", volunteer_id)

        transition = decide_application(
            volunteer,
            status,
            reviewer_id=ctx.user_id,
            permissions=ctx.permissions,
            rejection_reason=rejection_reason,
        )
        audit_service.record_transition(db, transition, district=volunteer.district, ip_address=ip_address)

        await db.commit()
        await db.refresh(volunteer)
        return volunteer


# Singleton instance
volunteer_service = VolunteerService()
