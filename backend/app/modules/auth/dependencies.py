from dataclasses import dataclass
from typing import Callable, Optional
import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import AuthenticationError, InactiveAccountError, MissingCapabilityError
from app.core.logging_config import set_user_id, set_district
from app.core.security import decode_token
from app.models.user import User
from app.modules.auth.permissions import RolePermissions, Scope, get_role_permissions

security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Resolve the bearer token to an active user"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(credentials.credentials, expected_type="access")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    try:
        uuid.UUID(user_id)
    except ValueError:
        raise AuthenticationError("Invalid user ID format")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise InactiveAccountError()

    # Rate limiter keys on this; log records pick up the context vars
    request.state.user_id = str(user.id)
    set_user_id(str(user.id))
    set_district(user.district)

    return user


@dataclass(frozen=True)
class RequestContext:
    """Caller identity and capabilities for a single request"""
    user: User
    permissions: RolePermissions

    @property
    def user_id(self) -> str:
        return str(self.user.id)

    @property
    def role(self):
        return self.user.role

    @property
    def district(self) -> Optional[str]:
        return self.user.district

    @property
    def scope(self) -> Scope:
        return self.permissions.scope

    def require(self, capability: str) -> None:
        if not self.permissions.allows(capability):
            raise MissingCapabilityError(capability)


async def get_request_context(user: User = Depends(get_current_user)) -> RequestContext:
    return RequestContext(user=user, permissions=get_role_permissions(user.role))


def require_capability(capability: str) -> Callable:
    """
    Dependency factory guarding an endpoint with one capability.

    Usage:
        @router.post("/inventory")
        async def create_item(ctx: RequestContext = Depends(require_capability("can_manage_inventory"))):
            ...
    """
    async def _dependency(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
        ctx.require(capability)
        return ctx

    return _dependency


def get_client_ip(request: Request) -> Optional[str]:
    """Client address recorded on audit rows"""
    return request.client.host if request.client else None
