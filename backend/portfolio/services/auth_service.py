"""
Authentication service for admin users and sessions
"""
import secrets
from datetime import timedelta
from functools import lru_cache
from typing import Optional

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portfolio.core.config import get_settings
from portfolio.core.logging_config import LoggingConfig
from portfolio.core.metrics import auth_logins_total
from portfolio.models.user import Session as UserSession
from portfolio.models.user import User
from portfolio.utils.datetime_utils import ensure_utc, utc_now

logger = LoggingConfig.get_logger(__name__)

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode('utf-8')[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Salted bcrypt hash; the salt is embedded in the returned string"""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Recompute with the stored salt and compare in constant time"""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode('utf-8'))
    except ValueError:
        # Malformed stored hash
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Hash checked for unknown usernames so both paths cost the same"""
    return hash_password(secrets.token_urlsafe(16))


class AuthService:
    """Service for user authentication and session management"""

    def __init__(self, db: Session):
        self.db = db
        self.session_duration_hours = get_settings().session_duration_hours

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def count_users(self) -> int:
        return self.db.query(User).count()

    def register_user(self, username: str, password: str) -> User:
        """
        Register a new user

        Raises:
            ValueError: If the username already exists
        """
        if self.get_user_by_username(username):
            raise ValueError(f"Username '{username}' already exists")

        user = User(username=username, password_hash=hash_password(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ValueError(f"Username '{username}' already exists") from e
        self.db.refresh(user)

        logger.info(f"Registered new user: {username}", extra={"user_id": user.id})
        return user

    def set_password(self, user: User, password: str) -> User:
        user.password_hash = hash_password(password)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Password changed for user '{user.username}'")
        return user

    def ensure_admin(self, username: str, password: str) -> Optional[User]:
        """Seed the first account; does nothing once any user exists"""
        if self.count_users() > 0:
            return None
        try:
            user = self.register_user(username, password)
        except ValueError:
            # Another worker seeded it first
            return None
        logger.info(f"Seeded admin account '{username}'")
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Authenticate a user by username and password

        Returns:
            User object if authentication successful, None otherwise
        """
        user = self.get_user_by_username(username)

        if not user:
            verify_password(password, _dummy_hash())
            auth_logins_total.labels(outcome="invalid_credentials").inc()
            logger.warning(f"Authentication failed: user '{username}' not found")
            return None

        if not verify_password(password, user.password_hash):
            auth_logins_total.labels(outcome="invalid_credentials").inc()
            logger.warning(f"Authentication failed: invalid password for user '{username}'")
            return None

        user.last_login = utc_now()
        self.db.commit()

        auth_logins_total.labels(outcome="success").inc()
        logger.info(f"User '{username}' authenticated successfully")
        return user

    def create_session(self, user_id: int, duration_hours: Optional[int] = None) -> UserSession:
        """Create a new session with a random opaque token"""
        duration = duration_hours or self.session_duration_hours
        now = utc_now()

        session = UserSession(
            user_id=user_id,
            token=secrets.token_urlsafe(32),
            expires_at=now + timedelta(hours=duration),
            created_at=now,
            last_activity=now,
        )

        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)

        logger.info(f"Created session for user {user_id}")
        return session

    def validate_session(self, token: str) -> Optional[User]:
        """
        Resolve a session token to its user

        Expired sessions are deleted on sight.
        """
        session = self.db.query(UserSession).filter(UserSession.token == token).first()
        if not session:
            return None

        now = utc_now()
        if ensure_utc(session.expires_at) < now:
            logger.info(f"Session {session.id} expired")
            self.db.delete(session)
            self.db.commit()
            return None

        session.last_activity = now
        self.db.commit()

        return self.db.get(User, session.user_id)

    def logout(self, token: str) -> bool:
        """
        Invalidate a session

        Returns:
            True if session was found and deleted, False otherwise
        """
        deleted = self.db.query(UserSession).filter(UserSession.token == token).delete(
            synchronize_session="fetch"
        )
        self.db.commit()
        if deleted:
            logger.info("Session invalidated")
        return bool(deleted)

    def logout_all_user_sessions(self, user_id: int) -> int:
        """Delete every session of a user; returns the count"""
        count = self.db.query(UserSession).filter(UserSession.user_id == user_id).delete(
            synchronize_session="fetch"
        )
        self.db.commit()
        logger.info(f"Invalidated {count} sessions for user {user_id}")
        return count

    def cleanup_expired_sessions(self) -> int:
        """Remove all expired sessions; returns the count"""
        count = self.db.query(UserSession).filter(UserSession.expires_at < utc_now()).delete(
            synchronize_session="fetch"
        )
        self.db.commit()
        if count > 0:
            logger.info(f"Cleaned up {count} expired sessions")
        return count
