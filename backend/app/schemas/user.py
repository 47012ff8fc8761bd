"""Schemas for user administration"""
from pydantic import Field
from typing import Optional

from app.models.user import UserRole
from app.schemas.base import CamelModel


class UserAdminUpdate(CamelModel):
    role: Optional[UserRole] = None
    district: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None
