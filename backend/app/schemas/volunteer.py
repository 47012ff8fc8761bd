from pydantic import EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.models.volunteer import VolunteerStatus
from app.schemas.base import CamelModel

PHONE_PATTERN = r'^\+?[0-9]{10,13}$'


class VolunteerBase(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: str = Field(..., pattern=PHONE_PATTERN)
    address: Optional[str] = None
    district: str = Field(..., min_length=1, max_length=100)
    date_of_birth: Optional[datetime] = None
    is_ex_serviceman: bool = False
    service_history: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    qualifications: Optional[str] = None
    medical_history: Optional[str] = None
    emergency_contact: Optional[str] = Field(None, max_length=255)
    emergency_phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    id_proof_url: Optional[str] = Field(None, max_length=500)
    certificate_url: Optional[str] = Field(None, max_length=500)
    photo_url: Optional[str] = Field(None, max_length=500)

    @field_validator('skills')
    @classmethod
    def clean_skills(cls, v: List[str]) -> List[str]:
        cleaned = []
        for skill in v:
            skill = skill.strip()
            if skill and skill not in cleaned:
                cleaned.append(skill)
        return cleaned


class VolunteerCreate(VolunteerBase):
    """Application submitted by the signed-in user"""
    pass


class VolunteerUpdate(CamelModel):
    """Profile edit. Review fields are not editable here."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    address: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    is_ex_serviceman: Optional[bool] = None
    service_history: Optional[str] = None
    skills: Optional[List[str]] = None
    qualifications: Optional[str] = None
    medical_history: Optional[str] = None
    emergency_contact: Optional[str] = Field(None, max_length=255)
    emergency_phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    id_proof_url: Optional[str] = Field(None, max_length=500)
    certificate_url: Optional[str] = Field(None, max_length=500)
    photo_url: Optional[str] = Field(None, max_length=500)


class VolunteerStatusUpdate(CamelModel):
    status: str
    rejection_reason: Optional[str] = None


class VolunteerResponse(CamelModel):
    id: str
    user_id: str
    full_name: str
    email: Optional[str] = None
    phone: str
    address: Optional[str] = None
    district: str
    date_of_birth: Optional[datetime] = None
    is_ex_serviceman: bool
    service_history: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    qualifications: Optional[str] = None
    medical_history: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    id_proof_url: Optional[str] = None
    certificate_url: Optional[str] = None
    photo_url: Optional[str] = None
    status: VolunteerStatus
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
