"""Training sessions and volunteer registrations"""
from sqlalchemy import Column, String, DateTime, Text, Integer, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, enum_column


class TrainingStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RegistrationStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    ATTENDED = "attended"


class TrainingSession(Base):
    """Scheduled training event. A null district means the session is statewide."""
    __tablename__ = "training_sessions"

    __table_args__ = (
        Index('ix_training_sessions_district_scheduled', 'district', 'scheduled_at'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    department_id = Column(GUID, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True)
    district = Column(String(100), nullable=True)

    scheduled_at = Column(DateTime, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    capacity = Column(Integer, default=50, nullable=False)
    location = Column(String(255), nullable=False)
    instructor = Column(String(255), nullable=True)

    status = Column(enum_column(TrainingStatus, "training_status"), default=TrainingStatus.SCHEDULED, nullable=False)
    created_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    registrations = relationship(
        "TrainingRegistration",
        back_populates="training_session",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<TrainingSession {self.title!r} {self.scheduled_at} {self.status}>"


class TrainingRegistration(Base):
    """A volunteer's seat in a training session"""
    __tablename__ = "training_registrations"

    __table_args__ = (
        UniqueConstraint('training_session_id', 'volunteer_id', name='uq_training_registration'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    training_session_id = Column(GUID, ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    volunteer_id = Column(GUID, ForeignKey("volunteers.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(enum_column(RegistrationStatus, "registration_status"), default=RegistrationStatus.CONFIRMED, nullable=False)

    registered_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    training_session = relationship("TrainingSession", back_populates="registrations")

    def __repr__(self):
        return f"<TrainingRegistration {self.volunteer_id} -> {self.training_session_id} {self.status}>"
