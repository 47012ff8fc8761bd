"""
User Service - account administration for state-level admins
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, func
from typing import List, Optional, Tuple
import logging

from app.core.exceptions import UserNotFoundError, ValidationError
from app.models.user import User, UserRole
from app.modules.auth.dependencies import RequestContext
from app.modules.auth.permissions import Scope, get_role_permissions
from app.schemas.user import UserAdminUpdate
from app.services.audit_service import audit_service

logger = logging.getLogger(__name__)


class UserService:

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(select(User).where(func.lower(User.username) == username.lower()))
        return result.scalar_one_or_none()

    async def list_users(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        role: Optional[UserRole] = None,
        district: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[User], int]:
        ctx.require("can_manage_users")

        filters = []
        if role:
            filters.append(User.role == role)
        if district:
            filters.append(User.district == district)
        if search and search.strip():
            term = f"%{search.strip()}%"
            filters.append(or_(User.username.ilike(term), User.email.ilike(term),
                               User.first_name.ilike(term), User.last_name.ilike(term)))

        total = await db.scalar(select(func.count(User.id)).where(*filters)) or 0
        result = await db.execute(
            select(User).where(*filters).order_by(User.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total

    async def update_user(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        user_id: str,
        data: UserAdminUpdate,
        ip_address: Optional[str] = None,
    ) -> User:
        """Change role, district or active flag"""
        ctx.require("can_manage_users")

        user = await db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        changes = data.model_dump(exclude_unset=True)
        if str(user.id) == ctx.user_id and (changes.get("is_active") is False or "role" in changes):
            raise ValidationError("You cannot change your own role or deactivate yourself")

        new_role = changes.get("role") or user.role
        new_district = changes.get("district", user.district)
        if get_role_permissions(new_role).scope is Scope.DISTRICT and not new_district:
            raise ValidationError("District administrators need a district", field="district")

        before = {
            "role": UserRole(user.role).value,
            "district": user.district,
            "is_active": user.is_active,
        }
        for field_name, value in changes.items():
            setattr(user, field_name, value)

        audit_service.record(
            db,
            action="user_updated",
            target_type="user",
            target_id=user.id,
            actor_id=ctx.user_id,
            district=user.district,
            details={
                "before": before,
                "after": {k: (v.value if isinstance(v, UserRole) else v) for k, v in changes.items()},
            },
            ip_address=ip_address,
        )
        await db.commit()
        await db.refresh(user)

        logger.info(f"User {user.username} updated by {ctx.user_id}: {sorted(changes)}")
        return user


# Singleton instance
user_service = UserService()
