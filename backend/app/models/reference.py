"""Static lookup tables: districts and departments"""
from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class District(Base):
    __tablename__ = "districts"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(100), unique=True, nullable=False)
    code = Column(String(10), unique=True, nullable=False)
    state = Column(String(100), default="Odisha", nullable=False)
    region = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<District {self.name} ({self.code})>"


class Department(Base):
    __tablename__ = "departments"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Department {self.name}>"
