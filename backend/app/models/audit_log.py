from sqlalchemy import Column, String, DateTime, Text, ForeignKey, JSON
from datetime import datetime

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class AuditLog(Base):
    """Trail of workflow transitions and administrative changes"""
    __tablename__ = "audit_logs"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    actor_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Action details
    action = Column(String(100), nullable=False)  # e.g. 'volunteer_approved', 'incident_status_changed'
    target_type = Column(String(50), nullable=False)  # e.g. 'volunteer', 'incident', 'user'
    target_id = Column(GUID, nullable=True)
    district = Column(String(100), nullable=True)

    # Change details
    details = Column(JSON, nullable=True)  # from/to status, changed fields

    # Request metadata
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog {self.action} by {self.actor_id}>"
