from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, enum_column


class VolunteerStatus(str, enum.Enum):
    """Application review status"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Volunteer(Base):
    """
    Volunteer profile submitted by a registered user.

    Status changes only through the approval workflow; the record is never
    deleted so rejected applications stay on file.
    """
    __tablename__ = "volunteers"

    __table_args__ = (
        Index('ix_volunteers_district_status', 'district', 'status'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    # Personal details
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=False)
    address = Column(Text, nullable=True)
    district = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(DateTime, nullable=True)

    # Service background
    is_ex_serviceman = Column(Boolean, default=False, nullable=False)
    service_history = Column(Text, nullable=True)
    skills = Column(JSON, default=list, nullable=False)
    qualifications = Column(Text, nullable=True)
    medical_history = Column(Text, nullable=True)

    # Emergency contact
    emergency_contact = Column(String(255), nullable=True)
    emergency_phone = Column(String(20), nullable=True)

    # Document references (uploads are stored elsewhere)
    id_proof_url = Column(String(500), nullable=True)
    certificate_url = Column(String(500), nullable=True)
    photo_url = Column(String(500), nullable=True)

    # Review
    status = Column(enum_column(VolunteerStatus, "volunteer_status"), default=VolunteerStatus.PENDING, nullable=False)
    approved_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="volunteer_profile", foreign_keys=[user_id])

    def __repr__(self):
        return f"<Volunteer {self.full_name} [{self.district}] {self.status}>"
