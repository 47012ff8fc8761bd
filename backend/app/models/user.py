from sqlalchemy import Column, String, Boolean, DateTime, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, enum_column


class UserRole(str, enum.Enum):
    """Portal roles, from least to most privileged"""
    VOLUNTEER = "volunteer"
    DISTRICT_ADMIN = "district_admin"
    DEPARTMENT_ADMIN = "department_admin"
    STATE_ADMIN = "state_admin"
    CMS_MANAGER = "cms_manager"


class User(Base):
    """Login identity. District is the scoping key for district admins."""
    __tablename__ = "users"

    __table_args__ = (
        Index('ix_users_role_district', 'role', 'district'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String(500), nullable=True)

    role = Column(enum_column(UserRole, "user_role"), default=UserRole.VOLUNTEER, nullable=False)
    district = Column(String(100), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)

    # Relationships
    volunteer_profile = relationship(
        "Volunteer",
        back_populates="user",
        uselist=False,
        foreign_keys="Volunteer.user_id",
    )

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or self.username

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"
