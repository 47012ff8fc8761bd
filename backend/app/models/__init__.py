# Re-export all models for convenient imports
from app.models.user import User, UserRole
from app.models.volunteer import Volunteer, VolunteerStatus
from app.models.incident import Incident, IncidentSeverity, IncidentStatus
from app.models.inventory import InventoryItem, InventoryCategory, ItemCondition
from app.models.training import TrainingSession, TrainingStatus, TrainingRegistration, RegistrationStatus
from app.models.assignment import Assignment, AssignmentStatus
from app.models.reference import District, Department
from app.models.cms import HeroBanner, Translation, SiteSetting
from app.models.audit_log import AuditLog

__all__ = [
    # Identity
    "User",
    "UserRole",
    # Volunteers
    "Volunteer",
    "VolunteerStatus",
    # Incidents
    "Incident",
    "IncidentSeverity",
    "IncidentStatus",
    # Inventory
    "InventoryItem",
    "InventoryCategory",
    "ItemCondition",
    # Training
    "TrainingSession",
    "TrainingStatus",
    "TrainingRegistration",
    "RegistrationStatus",
    # Assignments
    "Assignment",
    "AssignmentStatus",
    # Reference data
    "District",
    "Department",
    # Content
    "HeroBanner",
    "Translation",
    "SiteSetting",
    # Audit
    "AuditLog",
]
