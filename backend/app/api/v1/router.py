from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth,
    volunteers,
    incidents,
    inventory,
    trainings,
    assignments,
    dashboard,
    reference,
    users,
    audit_logs,
    cms,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(volunteers.router, prefix="/volunteers", tags=["Volunteers"])
api_router.include_router(incidents.router, prefix="/incidents", tags=["Incidents"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["Inventory"])
api_router.include_router(trainings.router, tags=["Trainings"])
api_router.include_router(assignments.router, tags=["Assignments"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(reference.router, tags=["Reference Data"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["Audit Logs"])
api_router.include_router(cms.router, prefix="/cms", tags=["CMS"])
