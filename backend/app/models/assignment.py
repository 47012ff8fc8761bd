from sqlalchemy import Column, String, DateTime, Text, ForeignKey, CheckConstraint, Index
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, enum_column


class AssignmentStatus(str, enum.Enum):
    ASSIGNED = "assigned"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DECLINED = "declined"


class Assignment(Base):
    """Duty given to a volunteer for an incident, a training session, or both"""
    __tablename__ = "assignments"

    __table_args__ = (
        CheckConstraint(
            'incident_id IS NOT NULL OR training_session_id IS NOT NULL',
            name='ck_assignments_has_target',
        ),
        Index('ix_assignments_volunteer_status', 'volunteer_id', 'status'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    volunteer_id = Column(GUID, ForeignKey("volunteers.id", ondelete="CASCADE"), nullable=False)
    incident_id = Column(GUID, ForeignKey("incidents.id", ondelete="CASCADE"), nullable=True, index=True)
    training_session_id = Column(GUID, ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=True)

    role = Column(String(100), nullable=True)  # e.g. "first aid", "traffic control"
    status = Column(enum_column(AssignmentStatus, "assignment_status"), default=AssignmentStatus.ASSIGNED, nullable=False)
    notes = Column(Text, nullable=True)

    assigned_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    assigned_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Assignment {self.id} volunteer={self.volunteer_id} {self.status}>"
