"""
Unit Tests for Request/Response Schemas
Tests for: validation, camelCase aliases, computed fields
"""
import pytest
from pydantic import ValidationError
from datetime import datetime
from uuid import uuid4

from app.models.incident import IncidentSeverity, IncidentStatus
from app.models.user import UserRole
from app.schemas.auth import LoginResponse, Token, UserLogin, UserRegister, UserResponse
from app.schemas.incident import IncidentCreate, IncidentResponse
from app.schemas.volunteer import VolunteerCreate, VolunteerStatusUpdate


class TestUserRegister:
    """Test UserRegister schema"""

    def test_valid_registration(self):
        user = UserRegister(
            username="ravi.kumar",
            password="SecurePassword123",
            email="ravi@example.com",
            firstName="Ravi",
            district="Puri",
        )

        assert user.username == "ravi.kumar"
        assert user.first_name == "Ravi"
        assert user.district == "Puri"

    def test_short_password_fails(self):
        with pytest.raises(ValidationError):
            UserRegister(username="ravi", password="short")

    @pytest.mark.parametrize("username", ["ab", "has space", "semi;colon"])
    def test_invalid_username_fails(self, username):
        with pytest.raises(ValidationError):
            UserRegister(username=username, password="SecurePassword123")

    def test_invalid_email_fails(self):
        with pytest.raises(ValidationError):
            UserRegister(username="ravi", password="SecurePassword123", email="not-an-email")


class TestUserLogin:

    def test_login_requires_both_fields(self):
        with pytest.raises(ValidationError):
            UserLogin(username="ravi")


class TestResponses:
    """Output schemas serialize with camelCase keys"""

    def test_user_response_aliases(self):
        user = UserResponse(
            id=str(uuid4()),
            username="district_admin",
            role=UserRole.DISTRICT_ADMIN,
            district="Khordha",
            is_active=True,
            created_at=datetime.utcnow(),
        )

        data = user.model_dump(by_alias=True, mode="json")

        assert data["role"] == "district_admin"
        assert data["isActive"] is True
        assert "createdAt" in data
        assert "firstName" in data

    def test_login_response_includes_tokens_and_user(self):
        user = UserResponse(
            id="u1", username="v1", role=UserRole.VOLUNTEER, is_active=True, created_at=datetime.utcnow()
        )
        response = LoginResponse(access_token="a", refresh_token="r", user=user)

        data = response.model_dump(by_alias=True)

        assert data["accessToken"] == "a"
        assert data["tokenType"] == "bearer"
        assert data["user"]["username"] == "v1"

    def test_token_accepts_snake_case(self):
        assert Token(access_token="a", refresh_token="r").refresh_token == "r"


class TestVolunteerSchemas:

    def test_skills_are_trimmed_and_deduplicated(self):
        volunteer = VolunteerCreate(
            fullName="Sita Das",
            phone="9876543210",
            district="Cuttack",
            skills=[" First Aid", "First Aid", "", "Swimming"],
        )

        assert volunteer.skills == ["First Aid", "Swimming"]
        assert volunteer.is_ex_serviceman is False

    @pytest.mark.parametrize("phone", ["12345", "98765abcde", "+9198765432101234"])
    def test_invalid_phone_fails(self, phone):
        with pytest.raises(ValidationError):
            VolunteerCreate(fullName="Sita Das", phone=phone, district="Cuttack")

    def test_status_update_alias(self):
        update = VolunteerStatusUpdate.model_validate({"status": "rejected", "rejectionReason": "Duplicate"})

        assert update.rejection_reason == "Duplicate"


class TestIncidentSchemas:

    def test_default_severity(self):
        incident = IncidentCreate(title="Fire", description="Shop fire", location="Market", district="Puri")

        assert incident.severity is IncidentSeverity.MEDIUM

    def test_latitude_range(self):
        with pytest.raises(ValidationError):
            IncidentCreate(title="Fire", description="x", location="y", district="Puri", latitude=120)

    @pytest.mark.parametrize("status,active", [(IncidentStatus.IN_PROGRESS, True), (IncidentStatus.CLOSED, False)])
    def test_response_is_active(self, status, active):
        incident = IncidentResponse(
            id="i1",
            title="Cyclone damage",
            description="Roof collapse",
            location="Puri beach road",
            district="Puri",
            severity=IncidentSeverity.CRITICAL,
            status=status,
            created_at=datetime.utcnow(),
        )

        assert incident.model_dump(by_alias=True)["isActive"] is active
