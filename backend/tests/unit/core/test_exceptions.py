"""
Unit Tests for Portal Exceptions
Tests for: status codes, public status codes, error envelopes
"""
import pytest

from app.core.exceptions import (
    AlreadyDecidedError,
    CapacityExceededError,
    IncidentNotFoundError,
    InvalidCredentialsError,
    MissingCapabilityError,
    PortalError,
    RecordAccessDeniedError,
    RejectionReasonRequiredError,
    ResourceNotFoundError,
    ValidationError,
    error_response,
)


class TestStatusCodes:

    @pytest.mark.parametrize("error,status", [
        (ValidationError("bad"), 400),
        (RejectionReasonRequiredError(), 400),
        (InvalidCredentialsError(), 401),
        (MissingCapabilityError("can_manage_users"), 403),
        (IncidentNotFoundError("abc"), 404),
        (AlreadyDecidedError("v1", "approved", "rejected"), 409),
        (CapacityExceededError("s1", 20), 409),
        (PortalError("boom"), 500),
    ])
    def test_status_code(self, error, status):
        assert error.public_status_code == status


class TestRecordAccessDenied:
    """Record-level denials look like missing records to clients"""

    def test_reported_as_not_found(self):
        error = RecordAccessDeniedError("Volunteer", "v-9")

        assert error.status_code == 403
        assert error.public_status_code == 404
        assert error_response(error)["error"] == ResourceNotFoundError("Volunteer", "v-9").to_dict()


class TestEnvelope:

    def test_error_response(self):
        error = ValidationError("Phone is required", field="phone")

        assert error_response(error) == {
            "success": False,
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Phone is required",
                "details": {"field": "phone"},
            },
        }

    def test_already_decided_message(self):
        error = AlreadyDecidedError("v-1", "approved", "rejected")

        assert error.code == "ALREADY_DECIDED"
        assert str(error) == "Volunteer application 'v-1' was already approved"
        assert error.details["volunteer_id"] == "v-1"
