"""
Unit Tests for Role Permissions
Tests for: capability table per role, unknown roles, capability lookup
"""
import pytest

from app.models.user import UserRole
from app.modules.auth.permissions import (
    CAPABILITIES,
    NO_PERMISSIONS,
    ROLE_PERMISSIONS,
    Scope,
    coerce_role,
    get_role_permissions,
)


class TestRolePermissionTable:
    """Capability records for each portal role"""

    def test_volunteer_has_no_capabilities(self):
        permissions = get_role_permissions(UserRole.VOLUNTEER)

        assert permissions.scope is Scope.VOLUNTEER
        assert not any(permissions.allows(c) for c in CAPABILITIES)

    def test_district_admin_is_district_scoped(self):
        permissions = get_role_permissions(UserRole.DISTRICT_ADMIN)

        assert permissions.scope is Scope.DISTRICT
        assert permissions.can_approve_volunteers
        assert permissions.can_manage_incidents
        assert permissions.can_manage_inventory
        assert permissions.can_view_reports
        assert not permissions.can_view_all_districts
        assert not permissions.can_manage_users
        assert not permissions.can_manage_cms

    @pytest.mark.parametrize("role", [UserRole.DEPARTMENT_ADMIN, UserRole.STATE_ADMIN])
    def test_state_level_admins_have_everything(self, role):
        permissions = get_role_permissions(role)

        assert permissions.scope is Scope.STATE
        assert all(permissions.allows(c) for c in CAPABILITIES)

    def test_cms_manager_only_manages_content(self):
        permissions = get_role_permissions(UserRole.CMS_MANAGER)

        assert permissions.can_manage_cms
        assert not permissions.can_approve_volunteers
        assert not permissions.can_manage_incidents
        assert not permissions.can_manage_users

    def test_every_role_has_an_entry(self):
        assert set(ROLE_PERMISSIONS) == set(UserRole)


class TestRoleResolution:
    """String roles, missing roles and unknown roles"""

    def test_string_role_matches_enum_role(self):
        assert get_role_permissions("district_admin") == get_role_permissions(UserRole.DISTRICT_ADMIN)

    @pytest.mark.parametrize("role", [None, "", "superuser", "STATE_ADMIN"])
    def test_unknown_role_gets_most_restrictive_record(self, role):
        assert get_role_permissions(role) is NO_PERMISSIONS

    def test_resolution_is_deterministic(self):
        assert get_role_permissions("state_admin") is get_role_permissions("state_admin")

    def test_coerce_role_returns_none_for_unknown(self):
        assert coerce_role("nobody") is None
        assert coerce_role("volunteer") is UserRole.VOLUNTEER


class TestCapabilityLookup:

    def test_unknown_capability_raises(self):
        with pytest.raises(KeyError):
            NO_PERMISSIONS.allows("can_fly")

    def test_to_dict_serializes_scope(self):
        data = get_role_permissions(UserRole.STATE_ADMIN).to_dict()

        assert data["scope"] == "state"
        assert set(data) == set(CAPABILITIES) | {"scope"}
