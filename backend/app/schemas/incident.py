from pydantic import Field, computed_field
from typing import Optional, List
from datetime import datetime

from app.models.incident import IncidentSeverity, IncidentStatus
from app.modules.workflows.incident_lifecycle import is_active_incident
from app.schemas.base import CamelModel


class IncidentCreate(CamelModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=500)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    district: str = Field(..., min_length=1, max_length=100)
    severity: IncidentSeverity = IncidentSeverity.MEDIUM


class IncidentUpdate(CamelModel):
    """
    Admin update. status goes through the lifecycle; assigned_to replaces
    the responder list; severity and descriptive fields are edited directly.
    """
    status: Optional[str] = None
    assigned_to: Optional[List[str]] = None
    severity: Optional[IncidentSeverity] = None
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=500)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class IncidentResponse(CamelModel):
    id: str
    reported_by: Optional[str] = None
    title: str
    description: str
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    district: str
    severity: IncidentSeverity
    status: IncidentStatus
    assigned_to: List[str] = Field(default_factory=list)
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def is_active(self) -> bool:
        return is_active_incident(self.status)
