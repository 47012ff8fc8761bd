# Authentication, role permissions and data scoping

from app.modules.auth.permissions import (
    RolePermissions,
    Scope,
    get_role_permissions,
)
from app.modules.auth.scoping import scope_records, is_visible
from app.modules.auth.dependencies import (
    RequestContext,
    get_current_user,
    get_request_context,
    require_capability,
)

__all__ = [
    "RolePermissions",
    "Scope",
    "get_role_permissions",
    "scope_records",
    "is_visible",
    "RequestContext",
    "get_current_user",
    "get_request_context",
    "require_capability",
]
