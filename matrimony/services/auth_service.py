from sqlalchemy.orm import Session
from matrimony.models import *
from matrimony.core import config
from matrimony.core.errors import InvalidArgument, Unauthorized
from matrimony.services.user_service import UserService
from datetime import datetime, timedelta
from typing import Optional, Tuple
import hashlib
import hmac
import logging
import secrets

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """scrypt hash stored as '<hex digest>.<salt>'"""
    salt = secrets.token_hex(16)
    digest = hashlib.scrypt(password.encode(), salt=salt.encode(), n=16384, r=8, p=1, dklen=64)
    return f"{digest.hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    try:
        digest_hex, salt = stored.split(".", 1)
    except ValueError:
        return False
    digest = hashlib.scrypt(password.encode(), salt=salt.encode(), n=16384, r=8, p=1, dklen=64)
    return hmac.compare_digest(digest.hex(), digest_hex)


class AuthService:
    @staticmethod
    def register(session: Session, username: str, password: str, is_admin: bool = False) -> Tuple[User, str]:
        if not password:
            raise InvalidArgument("Password is required", field="password")
        user = UserService.create_user(session, username, hash_password(password), is_admin=is_admin)
        return user, AuthService.issue_token(session, user)

    @staticmethod
    def login(session: Session, username: str, password: str) -> Tuple[User, str]:
        user = UserService.get_user_by_username(session, (username or "").strip())
        if not user or not verify_password(password or "", user.password):
            logger.info(f"Failed login for {username}")
            raise Unauthorized("Invalid username or password")
        return user, AuthService.issue_token(session, user)

    @staticmethod
    def issue_token(session: Session, user: User) -> str:
        now = datetime.utcnow()
        token = AuthToken(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            created_at=now,
            expires_at=now + timedelta(hours=config.SESSION_TTL_HOURS)
        )
        try:
            session.add(token)
            session.commit()
            logger.debug(f"Issued session token for user {user.id}")
            return token.token
        except Exception as e:
            session.rollback()
            logger.error(f"Error issuing token for user {user.id}: {e}")
            raise

    @staticmethod
    def authenticate(session: Session, token: Optional[str]) -> User:
        if not token:
            raise Unauthorized("Not authenticated")
        record = session.query(AuthToken).filter_by(token=token).first()
        if not record or record.expires_at <= datetime.utcnow():
            raise Unauthorized("Session expired or invalid")
        return record.user

    @staticmethod
    def logout(session: Session, token: str) -> bool:
        deleted = session.query(AuthToken).filter_by(token=token).delete()
        session.commit()
        return bool(deleted)

    @staticmethod
    def purge_expired_tokens(session: Session) -> int:
        """Delete every session token past its expiry"""
        try:
            purged = session.query(AuthToken).filter(
                AuthToken.expires_at <= datetime.utcnow()
            ).delete(synchronize_session=False)
            session.commit()
            logger.info(f"Purged {purged} expired session tokens")
            return purged
        except Exception as e:
            session.rollback()
            logger.error(f"Error purging expired session tokens: {e}")
            raise
