# API endpoints
from . import auth, volunteers, incidents, inventory, trainings, assignments, dashboard, reference, users, audit_logs, cms

__all__ = ["auth", "volunteers", "incidents", "inventory", "trainings", "assignments", "dashboard", "reference", "users", "audit_logs", "cms"]
