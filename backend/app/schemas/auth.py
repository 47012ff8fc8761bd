from pydantic import EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.config import settings
from app.models.user import UserRole
from app.schemas.base import CamelModel


class UserRegister(CamelModel):
    """Self-service signup. The role is always volunteer; admins promote later."""
    username: str = Field(..., min_length=3, max_length=100, pattern=r'^[A-Za-z0-9_.-]+$')
    password: str = Field(..., max_length=128)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")
        return v


class UserLogin(CamelModel):
    username: str
    password: str


class RefreshRequest(CamelModel):
    refresh_token: str


class Token(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class PermissionsResponse(CamelModel):
    can_approve_volunteers: bool
    can_manage_incidents: bool
    can_manage_inventory: bool
    can_view_reports: bool
    can_export_data: bool
    can_view_all_districts: bool
    can_manage_users: bool
    can_manage_cms: bool
    scope: str


class UserResponse(CamelModel):
    id: str
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: UserRole
    district: Optional[str] = None
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None


class CurrentUserResponse(UserResponse):
    permissions: PermissionsResponse
    volunteer_id: Optional[str] = None


class LoginResponse(Token):
    user: UserResponse


class NavItemResponse(CamelModel):
    key: str
    label: str
    path: str
    icon: str


class NavigationResponse(CamelModel):
    dashboard_title: str
    dashboard_subtitle: str
    sidebar_title: str
    items: List[NavItemResponse]
