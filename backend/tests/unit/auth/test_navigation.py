"""
Unit Tests for Navigation
Tests for: menu entries per role, dashboard titles, icon fallback
"""
import pytest

from app.core.config import settings
from app.models.user import UserRole
from app.modules.auth.navigation import (
    NavIcon,
    build_navigation,
    dashboard_subtitle,
    dashboard_title,
    resolve_icon,
    sidebar_title,
)
from app.modules.auth.permissions import NO_PERMISSIONS, get_role_permissions


def nav_keys(role):
    return [item.key for item in build_navigation(get_role_permissions(role))]


class TestBuildNavigation:
    """Menu entries derived from capabilities"""

    def test_volunteer_menu(self):
        assert nav_keys(UserRole.VOLUNTEER) == ["my-dashboard", "my-tasks", "my-training", "profile"]

    def test_district_admin_menu_has_no_reports_or_cms(self):
        keys = nav_keys(UserRole.DISTRICT_ADMIN)

        assert keys == ["overview", "volunteers", "incidents", "tasks", "trainings", "inventory"]

    @pytest.mark.parametrize("role", [UserRole.STATE_ADMIN, UserRole.DEPARTMENT_ADMIN])
    def test_state_admin_menu_includes_reports_and_cms(self, role):
        keys = nav_keys(role)

        assert "reports" in keys
        assert "cms" in keys
        assert "my-dashboard" not in keys

    def test_cms_manager_menu(self):
        assert nav_keys(UserRole.CMS_MANAGER) == ["overview", "cms"]

    def test_no_permissions_gets_volunteer_menu(self):
        keys = [item.key for item in build_navigation(NO_PERMISSIONS)]

        assert keys == nav_keys(UserRole.VOLUNTEER)

    def test_nav_item_serializes_icon_value(self):
        item = build_navigation(get_role_permissions(UserRole.VOLUNTEER))[0]

        assert item.to_dict()["icon"] == NavIcon.DASHBOARD.value


class TestTitles:

    def test_dashboard_title_per_role(self):
        assert dashboard_title(UserRole.DISTRICT_ADMIN) == "District Admin"
        assert dashboard_title("state_admin") == "State Admin"
        assert dashboard_title(None) == "Dashboard"

    def test_district_subtitle_names_the_district(self):
        assert dashboard_subtitle(UserRole.DISTRICT_ADMIN, "Puri") == "Puri District Operations"

    def test_state_subtitle(self):
        assert dashboard_subtitle(UserRole.STATE_ADMIN) == "Statewide Civil Defence Operations"

    def test_sidebar_title(self):
        assert sidebar_title(UserRole.DISTRICT_ADMIN, "Ganjam") == "District Admin - Ganjam"
        assert sidebar_title(UserRole.STATE_ADMIN) == f"State Admin - {settings.STATE_NAME}"
        assert sidebar_title("bogus") == "Volunteer Management"


class TestIconResolution:

    @pytest.mark.parametrize("name,expected", [
        ("Users", NavIcon.USERS),
        ("users", NavIcon.USERS),
        ("ALERT", NavIcon.ALERT),
        ("NoSuchIcon", NavIcon.DEFAULT),
        (None, NavIcon.DEFAULT),
        ("", NavIcon.DEFAULT),
    ])
    def test_resolve_icon(self, name, expected):
        assert resolve_icon(name) is expected
