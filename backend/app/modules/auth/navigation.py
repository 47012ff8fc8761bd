"""
Role-conditional navigation and dashboard titles.

Menus are derived from a declarative table of (view, predicate over
RolePermissions) rows; adding a view means adding a row, not another
role branch.
"""

import enum
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from app.core.config import settings
from app.models.user import UserRole
from app.modules.auth.permissions import RolePermissions, Scope, coerce_role, get_role_permissions


class NavIcon(str, enum.Enum):
    """Icon names understood by the client icon set"""
    DASHBOARD = "LayoutDashboard"
    USERS = "Users"
    ALERT = "AlertTriangle"
    TASKS = "ClipboardList"
    TRAINING = "GraduationCap"
    PACKAGE = "Package"
    REPORTS = "BarChart3"
    PROFILE = "UserCircle"
    SETTINGS = "Settings"
    DEFAULT = "Circle"


def resolve_icon(name: Optional[str]) -> NavIcon:
    """Look up an icon by member name or client value, falling back to DEFAULT"""
    if not name:
        return NavIcon.DEFAULT
    try:
        return NavIcon(name)
    except ValueError:
        pass
    return NavIcon.__members__.get(name.upper(), NavIcon.DEFAULT)


@dataclass(frozen=True)
class NavItem:
    key: str
    label: str
    path: str
    icon: NavIcon

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "label": self.label, "path": self.path, "icon": self.icon.value}


Predicate = Callable[[RolePermissions], bool]


def _admin_scope(p: RolePermissions) -> bool:
    return p.scope in (Scope.DISTRICT, Scope.STATE)


def _volunteer_scope(p: RolePermissions) -> bool:
    return p.scope is Scope.VOLUNTEER


NAVIGATION_TABLE: Tuple[Tuple[NavItem, Predicate], ...] = (
    (NavItem("overview", "Dashboard", "/dashboard/overview", NavIcon.DASHBOARD), _admin_scope),
    (NavItem("volunteers", "Volunteers", "/dashboard/volunteers", NavIcon.USERS),
     lambda p: p.can_approve_volunteers),
    (NavItem("incidents", "Incidents", "/dashboard/incidents", NavIcon.ALERT),
     lambda p: p.can_manage_incidents),
    (NavItem("tasks", "Tasks", "/dashboard/tasks", NavIcon.TASKS),
     lambda p: p.can_manage_incidents),
    (NavItem("trainings", "Trainings", "/dashboard/trainings", NavIcon.TRAINING),
     lambda p: p.can_approve_volunteers),
    (NavItem("inventory", "Inventory", "/dashboard/inventory", NavIcon.PACKAGE),
     lambda p: p.can_manage_inventory),
    (NavItem("reports", "Reports", "/dashboard/reports", NavIcon.REPORTS),
     lambda p: p.can_view_reports and p.scope is Scope.STATE),
    (NavItem("cms", "CMS Manager", "/dashboard/cms", NavIcon.SETTINGS),
     lambda p: p.can_manage_cms),
    (NavItem("my-dashboard", "My Dashboard", "/dashboard/volunteer", NavIcon.DASHBOARD), _volunteer_scope),
    (NavItem("my-tasks", "My Tasks", "/dashboard/volunteer/tasks", NavIcon.TASKS), _volunteer_scope),
    (NavItem("my-training", "Training", "/dashboard/volunteer/training", NavIcon.TRAINING), _volunteer_scope),
    (NavItem("profile", "Profile", "/dashboard/volunteer/profile", NavIcon.PROFILE), _volunteer_scope),
)


def build_navigation(permissions: RolePermissions) -> List[NavItem]:
    return [item for item, visible in NAVIGATION_TABLE if visible(permissions)]


_DASHBOARD_TITLES: Dict[UserRole, str] = {
    UserRole.VOLUNTEER: "Volunteer",
    UserRole.DISTRICT_ADMIN: "District Admin",
    UserRole.DEPARTMENT_ADMIN: "Department Admin",
    UserRole.STATE_ADMIN: "State Admin",
    UserRole.CMS_MANAGER: "CMS Manager",
}


def dashboard_title(role: Union[UserRole, str, None]) -> str:
    return _DASHBOARD_TITLES.get(coerce_role(role), "Dashboard")


def dashboard_subtitle(role: Union[UserRole, str, None], district: Optional[str] = None) -> str:
    scope = get_role_permissions(role).scope
    if scope is Scope.DISTRICT and district:
        return f"{district} District Operations"
    if scope is Scope.STATE:
        return "Statewide Civil Defence Operations"
    return f"Civil Defence, {settings.STATE_NAME}"


def sidebar_title(role: Union[UserRole, str, None], district: Optional[str] = None) -> str:
    resolved = coerce_role(role)
    state = settings.STATE_NAME
    if resolved is UserRole.DISTRICT_ADMIN:
        return f"District Admin - {district}" if district else "District Admin"
    if resolved is UserRole.DEPARTMENT_ADMIN:
        return f"Department Admin - {state}"
    if resolved is UserRole.STATE_ADMIN:
        return f"State Admin - {state}"
    if resolved is UserRole.VOLUNTEER:
        return "Volunteer Portal"
    if resolved is UserRole.CMS_MANAGER:
        return f"CMS Manager - {state}"
    return "Volunteer Management"
