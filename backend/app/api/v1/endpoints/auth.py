from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime

from app.core.database import get_db
from app.core.exceptions import AuthenticationError, DuplicateResourceError, InvalidCredentialsError, InactiveAccountError
from app.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    create_refresh_token,
    decode_token
)
from app.core.logging_config import logger, set_user_id
from app.models.user import User, UserRole
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    RefreshRequest,
    Token,
    LoginResponse,
    UserResponse,
    CurrentUserResponse,
    NavigationResponse,
)
from app.schemas.base import MessageResponse
from app.modules.auth.dependencies import RequestContext, get_client_ip, get_current_user, get_request_context
from app.modules.auth.navigation import build_navigation, dashboard_subtitle, dashboard_title, sidebar_title
from app.modules.auth.permissions import get_role_permissions
from app.services.user_service import user_service
from app.services.volunteer_service import volunteer_service
from app.core.rate_limiter import login_rate_limit, signup_rate_limit

router = APIRouter()


def _issue_tokens(user: User) -> dict:
    claims = {"sub": str(user.id), "role": UserRole(user.role).value}
    return {
        "access_token": create_access_token(claims),
        "refresh_token": create_refresh_token({"sub": str(user.id)}),
        "token_type": "bearer",
    }


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@signup_rate_limit()
async def signup(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Create a volunteer account. Admin roles are granted later by a state admin."""
    client_ip = get_client_ip(request)

    if await user_service.get_by_username(db, user_data.username):
        logger.log_auth_event(
            event="signup",
            success=False,
            username=user_data.username,
            reason="Username taken",
            client_ip=client_ip
        )
        raise DuplicateResourceError("Username is already taken", field="username")

    user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password),
        email=user_data.email,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        district=user_data.district,
        role=UserRole.VOLUNTEER,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.log_auth_event(event="signup", success=True, username=user.username, client_ip=client_ip)
    return user


@router.post("/login", response_model=LoginResponse)
@login_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Exchange username and password for an access/refresh token pair"""
    client_ip = get_client_ip(request)

    user = await user_service.get_by_username(db, credentials.username)
    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            username=credentials.username,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.log_auth_event(
            event="login",
            success=False,
            username=user.username,
            reason="Account disabled",
            client_ip=client_ip
        )
        raise InactiveAccountError()

    user.last_login = datetime.utcnow()
    await db.commit()
    await db.refresh(user)

    set_user_id(str(user.id))
    logger.log_auth_event(
        event="login",
        success=True,
        username=user.username,
        client_ip=client_ip,
        user_role=UserRole(user.role).value
    )

    return {**_issue_tokens(user), "user": user}


@router.post("/refresh", response_model=Token)
async def refresh_token(
    body: RefreshRequest,
    db: AsyncSession = Depends(get_db)
):
    """Issue a fresh token pair from a valid refresh token"""
    payload = decode_token(body.refresh_token, expected_type="refresh")

    user = await db.get(User, payload.get("sub"))
    if not user:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise InactiveAccountError()

    logger.log_auth_event(event="refresh", success=True, username=user.username)
    return _issue_tokens(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards them"""
    logger.log_auth_event(event="logout", success=True, username=current_user.username)
    return {"message": "Logged out"}


@router.get("/user", response_model=CurrentUserResponse)
async def get_me(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Current user with resolved permissions"""
    profile = await volunteer_service.get_profile_for_user(db, ctx.user_id)
    data = UserResponse.model_validate(ctx.user).model_dump()
    return {
        **data,
        "permissions": get_role_permissions(ctx.role).to_dict(),
        "volunteer_id": str(profile.id) if profile else None,
    }


@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(ctx: RequestContext = Depends(get_request_context)):
    """Sidebar entries and dashboard headings for the caller's role"""
    return {
        "dashboard_title": dashboard_title(ctx.role),
        "dashboard_subtitle": dashboard_subtitle(ctx.role, ctx.district),
        "sidebar_title": sidebar_title(ctx.role, ctx.district),
        "items": [item.to_dict() for item in build_navigation(ctx.permissions)],
    }
