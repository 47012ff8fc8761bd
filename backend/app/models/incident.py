from sqlalchemy import Column, String, DateTime, Text, Float, ForeignKey, JSON, Index
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, enum_column


class IncidentSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IncidentStatus(str, enum.Enum):
    REPORTED = "reported"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Incident(Base):
    """Reported emergency in a district"""
    __tablename__ = "incidents"

    __table_args__ = (
        Index('ix_incidents_district_status', 'district', 'status'),
        Index('ix_incidents_severity', 'severity'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    reported_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(500), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    district = Column(String(100), nullable=False)

    severity = Column(enum_column(IncidentSeverity, "incident_severity"), default=IncidentSeverity.MEDIUM, nullable=False)
    status = Column(enum_column(IncidentStatus, "incident_status"), default=IncidentStatus.REPORTED, nullable=False)

    # Volunteer ids of responders
    assigned_to = Column(JSON, default=list, nullable=False)

    resolved_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    resolved_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Incident {self.title!r} [{self.district}] {self.severity}/{self.status}>"
