"""
Role -> capability resolution.

Every caller (request context, navigation, scoping, dashboards) asks this
module what a role may do; no other module branches on role names.
"""

import enum
from dataclasses import dataclass, asdict
from typing import Dict, Optional, Union

from app.models.user import UserRole


class Scope(str, enum.Enum):
    """Which slice of district-owned records a role can see"""
    VOLUNTEER = "volunteer"
    DISTRICT = "district"
    STATE = "state"


@dataclass(frozen=True)
class RolePermissions:
    can_approve_volunteers: bool = False
    can_manage_incidents: bool = False
    can_manage_inventory: bool = False
    can_view_reports: bool = False
    can_export_data: bool = False
    can_view_all_districts: bool = False
    can_manage_users: bool = False
    can_manage_cms: bool = False
    scope: Scope = Scope.VOLUNTEER

    def allows(self, capability: str) -> bool:
        """True when the named boolean capability is granted"""
        if capability not in CAPABILITIES:
            raise KeyError(f"Unknown capability: {capability}")
        return bool(getattr(self, capability))

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["scope"] = self.scope.value
        return data


CAPABILITIES = (
    "can_approve_volunteers",
    "can_manage_incidents",
    "can_manage_inventory",
    "can_view_reports",
    "can_export_data",
    "can_view_all_districts",
    "can_manage_users",
    "can_manage_cms",
)

NO_PERMISSIONS = RolePermissions()

_FULL_STATE_ACCESS = RolePermissions(
    can_approve_volunteers=True,
    can_manage_incidents=True,
    can_manage_inventory=True,
    can_view_reports=True,
    can_export_data=True,
    can_view_all_districts=True,
    can_manage_users=True,
    can_manage_cms=True,
    scope=Scope.STATE,
)

ROLE_PERMISSIONS: Dict[UserRole, RolePermissions] = {
    UserRole.VOLUNTEER: NO_PERMISSIONS,
    UserRole.DISTRICT_ADMIN: RolePermissions(
        can_approve_volunteers=True,
        can_manage_incidents=True,
        can_manage_inventory=True,
        can_view_reports=True,
        can_export_data=True,
        scope=Scope.DISTRICT,
    ),
    UserRole.DEPARTMENT_ADMIN: _FULL_STATE_ACCESS,
    UserRole.STATE_ADMIN: _FULL_STATE_ACCESS,
    UserRole.CMS_MANAGER: RolePermissions(can_manage_cms=True, scope=Scope.STATE),
}


def coerce_role(role: Union[UserRole, str, None]) -> Optional[UserRole]:
    """Map a stored or transmitted role value to UserRole, None if unrecognised"""
    if role is None or isinstance(role, UserRole):
        return role
    try:
        return UserRole(role)
    except ValueError:
        return None


def get_role_permissions(role: Union[UserRole, str, None]) -> RolePermissions:
    """Capabilities for a role. Missing or unknown roles get no capabilities."""
    resolved = coerce_role(role)
    if resolved is None:
        return NO_PERMISSIONS
    return ROLE_PERMISSIONS.get(resolved, NO_PERMISSIONS)
