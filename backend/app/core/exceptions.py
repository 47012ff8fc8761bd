"""
Portal Exceptions
=================

Services and workflow functions raise these; the handler registered in
app.main turns them into JSON error responses. The four families map to
HTTP status codes:

    validation      -> 400
    authentication  -> 401
    authorization   -> 403 (record-level denials are reported as 404)
    not found       -> 404
    state conflict  -> 409

Usage:
    from app.core.exceptions import VolunteerNotFoundError, InvalidTransitionError

    if not volunteer:
        raise VolunteerNotFoundError(volunteer_id)
"""

from typing import Optional, Any, Dict, Iterable


class PortalError(Exception):
    """Base exception for all portal errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def public_status_code(self) -> int:
        """Status code sent to the client"""
        return self.status_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(PortalError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class InvalidCredentialsError(AuthenticationError):
    """Username or password did not match"""

    def __init__(self):
        super().__init__("Invalid username or password")
        self.code = "INVALID_CREDENTIALS"


class InactiveAccountError(AuthenticationError):
    """Account has been deactivated by an administrator"""

    def __init__(self):
        super().__init__("Account is disabled")
        self.code = "ACCOUNT_DISABLED"


class AuthorizationError(PortalError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


class MissingCapabilityError(AuthorizationError):
    """Caller's role lacks the capability an action needs"""

    def __init__(self, capability: str):
        super().__init__(f"Your role does not allow this action ({capability})")
        self.code = "MISSING_CAPABILITY"
        self.details = {"capability": capability}


class RecordAccessDeniedError(AuthorizationError):
    """
    Caller may not see or touch a specific record.

    Clients get the same 404 they would for a missing record, so a
    district admin cannot probe for ids in other districts.
    """

    def __init__(self, resource_type: str, resource_id: str, message: Optional[str] = None):
        super().__init__(message or f"Not authorized to access {resource_type} '{resource_id}'")
        self.code = "RECORD_ACCESS_DENIED"
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.details = {"resource_type": resource_type, "resource_id": resource_id}

    @property
    def public_status_code(self) -> int:
        return 404

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": f"{self.resource_type.upper()}_NOT_FOUND",
            "message": f"{self.resource_type} with ID '{self.resource_id}' not found",
            "details": {"resource_type": self.resource_type, "resource_id": self.resource_id}
        }


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(PortalError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class VolunteerNotFoundError(ResourceNotFoundError):
    def __init__(self, volunteer_id: str):
        super().__init__("Volunteer", volunteer_id)


class IncidentNotFoundError(ResourceNotFoundError):
    def __init__(self, incident_id: str):
        super().__init__("Incident", incident_id)


class InventoryItemNotFoundError(ResourceNotFoundError):
    def __init__(self, item_id: str):
        super().__init__("InventoryItem", item_id)


class TrainingSessionNotFoundError(ResourceNotFoundError):
    def __init__(self, session_id: str):
        super().__init__("TrainingSession", session_id)


class AssignmentNotFoundError(ResourceNotFoundError):
    def __init__(self, assignment_id: str):
        super().__init__("Assignment", assignment_id)


class ContentNotFoundError(ResourceNotFoundError):
    """Banner, translation or site setting not found"""

    def __init__(self, content_type: str, content_id: str):
        super().__init__(content_type, content_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(PortalError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class RejectionReasonRequiredError(ValidationError):
    """Rejecting a volunteer needs a non-blank reason"""

    def __init__(self):
        super().__init__("A rejection reason is required", field="rejectionReason")
        self.code = "REJECTION_REASON_REQUIRED"


class ProfileRequiredError(ValidationError):
    """Action needs the caller to have a volunteer profile"""

    def __init__(self):
        super().__init__("Register a volunteer profile first")
        self.code = "VOLUNTEER_PROFILE_REQUIRED"


# ============================================
# State Conflict Errors (409-type)
# ============================================

class StateConflictError(PortalError):
    """Request conflicts with the record's current state"""

    status_code = 409

    def __init__(self, message: str, code: str = "STATE_CONFLICT", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class InvalidTransitionError(StateConflictError):
    """Status change not permitted from the current status"""

    def __init__(self, entity: str, current: str, target: str, allowed: Iterable[str] = ()):
        allowed_list = sorted(allowed)
        super().__init__(
            f"{entity} cannot move from '{current}' to '{target}'",
            code="INVALID_TRANSITION",
            details={
                "entity": entity,
                "current_status": current,
                "target_status": target,
                "allowed": allowed_list,
            }
        )


class AlreadyDecidedError(InvalidTransitionError):
    """Volunteer application was already approved or rejected"""

    def __init__(self, volunteer_id: str, current: str, target: str):
        super().__init__("Volunteer", current, target)
        self.message = f"Volunteer application '{volunteer_id}' was already {current}"
        self.args = (self.message,)
        self.code = "ALREADY_DECIDED"
        self.details["volunteer_id"] = volunteer_id


class DuplicateResourceError(StateConflictError):
    """Unique resource already exists"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="DUPLICATE_RESOURCE", details={"field": field} if field else {})


class CapacityExceededError(StateConflictError):
    """Training session is full"""

    def __init__(self, session_id: str, capacity: int):
        super().__init__(
            "Training session is at full capacity",
            code="CAPACITY_EXCEEDED",
            details={"training_session_id": session_id, "capacity": capacity}
        )


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: PortalError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
