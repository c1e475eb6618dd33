"""
Authentication API routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from portfolio.api.routing import route_kwargs
from portfolio.components.contracts import Message, api
from portfolio.components.entities import LoginRequest
from portfolio.core.auth import get_current_user_required, get_session_token
from portfolio.core.config import get_settings
from portfolio.core.database import get_db
from portfolio.core.exceptions import Unauthorized
from portfolio.core.logging_config import LoggingConfig
from portfolio.models.user import User
from portfolio.services.auth_service import AuthService

logger = LoggingConfig.get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post(api.auth.login.route_path, **route_kwargs(api.auth.login))
def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """Check the password and open a session carried by a cookie"""
    settings = get_settings()
    auth_service = AuthService(db)

    user = auth_service.authenticate(credentials.username, credentials.password)
    if not user:
        raise Unauthorized("Invalid username or password")

    session = auth_service.create_session(user.id)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_duration_hours * 60 * 60,
    )
    return user


@router.post(api.auth.logout.route_path, **route_kwargs(api.auth.logout))
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
):
    """Invalidate the current session and clear its cookie"""
    AuthService(db).logout(token)
    response.delete_cookie(key=get_settings().session_cookie_name)
    return Message(message="Logged out")


@router.get(api.auth.me.route_path, **route_kwargs(api.auth.me))
def whoami(current_user: User = Depends(get_current_user_required)):
    """Get current user information"""
    return current_user
