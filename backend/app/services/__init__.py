from app.services.audit_service import AuditService, audit_service
from app.services.volunteer_service import VolunteerService, volunteer_service
from app.services.incident_service import IncidentService, incident_service
from app.services.inventory_service import InventoryService, inventory_service
from app.services.training_service import TrainingService, training_service
from app.services.assignment_service import AssignmentService, assignment_service
from app.services.dashboard_service import DashboardService, dashboard_service
from app.services.user_service import UserService, user_service
from app.services.cms_service import CMSService, cms_service
from app.services.reference_service import ReferenceService, reference_service

__all__ = [
    # Workflow services
    "VolunteerService",
    "volunteer_service",
    "IncidentService",
    "incident_service",
    "AssignmentService",
    "assignment_service",
    "TrainingService",
    "training_service",
    "InventoryService",
    "inventory_service",
    # Reporting
    "DashboardService",
    "dashboard_service",
    "AuditService",
    "audit_service",
    # Administration
    "UserService",
    "user_service",
    "CMSService",
    "cms_service",
    "ReferenceService",
    "reference_service",
]
