"""
Authentication dependencies
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from portfolio.core.config import get_settings
from portfolio.core.database import get_db
from portfolio.core.exceptions import Unauthorized
from portfolio.core.logging_config import LoggingConfig
from portfolio.models.user import User
from portfolio.services.auth_service import AuthService

logger = LoggingConfig.get_logger(__name__)

# HTTP Bearer security scheme; the session cookie is the primary carrier
security = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Token from the Authorization header, else from the session cookie"""
    if credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().session_cookie_name)


def get_current_user_optional(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Current user if authenticated, otherwise None"""
    if not token:
        return None
    user = AuthService(db).validate_session(token)
    if user is not None:
        LoggingConfig.set_context(user_id=user.id)
    return user


def get_current_user_required(
    user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    """
    Require authentication: return User or raise Unauthorized
    """
    if user is None:
        raise Unauthorized("Authentication required")
    return user
