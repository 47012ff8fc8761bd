from pydantic import Field
from typing import Optional
from datetime import datetime

from app.models.training import RegistrationStatus, TrainingStatus
from app.schemas.base import CamelModel


class TrainingSessionCreate(CamelModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = None
    department_id: Optional[str] = None
    district: Optional[str] = Field(None, max_length=100, description="Omit for a statewide session")
    scheduled_at: datetime
    duration: int = Field(..., gt=0, description="Minutes")
    capacity: Optional[int] = Field(None, gt=0)
    location: str = Field(..., min_length=1, max_length=255)
    instructor: Optional[str] = Field(None, max_length=255)


class TrainingSessionUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = None
    department_id: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(None, gt=0)
    capacity: Optional[int] = Field(None, gt=0)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    instructor: Optional[str] = Field(None, max_length=255)


class TrainingStatusUpdate(CamelModel):
    status: str


class TrainingSessionResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    department_id: Optional[str] = None
    district: Optional[str] = None
    scheduled_at: datetime
    duration: int
    capacity: int
    location: str
    instructor: Optional[str] = None
    status: TrainingStatus
    registered_count: int = 0
    seats_left: int = 0
    created_at: datetime


class TrainingRegistrationResponse(CamelModel):
    id: str
    training_session_id: str
    volunteer_id: str
    status: RegistrationStatus
    registered_at: datetime


class MyTrainingResponse(CamelModel):
    registration: TrainingRegistrationResponse
    session: TrainingSessionResponse
