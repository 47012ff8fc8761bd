from pydantic import Field, model_validator
from typing import Optional
from datetime import datetime

from app.models.assignment import AssignmentStatus
from app.schemas.base import CamelModel


class AssignmentCreate(CamelModel):
    volunteer_id: str
    incident_id: Optional[str] = None
    training_session_id: Optional[str] = None
    role: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None

    @model_validator(mode='after')
    def require_target(self):
        if not self.incident_id and not self.training_session_id:
            raise ValueError("An assignment needs an incidentId or a trainingSessionId")
        return self


class AssignmentStatusUpdate(CamelModel):
    status: str
    notes: Optional[str] = None


class AssignmentResponse(CamelModel):
    id: str
    volunteer_id: str
    incident_id: Optional[str] = None
    training_session_id: Optional[str] = None
    role: Optional[str] = None
    status: AssignmentStatus
    notes: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_at: datetime
    completed_at: Optional[datetime] = None
