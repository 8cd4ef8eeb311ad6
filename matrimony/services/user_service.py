from sqlalchemy.orm import Session
from matrimony.models import *
from matrimony.core.errors import Conflict, InvalidArgument, NotFound
from typing import Optional, Dict, Any, List
import logging

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def get_user(session: Session, user_id: int) -> User:
        user = session.query(User).filter_by(id=user_id).first()
        if not user:
            raise NotFound(f"User {user_id} not found")
        return user

    @staticmethod
    def get_user_by_username(session: Session, username: str) -> Optional[User]:
        return session.query(User).filter_by(username=username).first()

    @staticmethod
    def create_user(session: Session, username: str, password_hash: str, is_admin: bool = False) -> User:
        """Create an account; the caller supplies an already hashed password"""
        username = (username or "").strip()
        if not username:
            raise InvalidArgument("Username is required", field="username")
        if not password_hash:
            raise InvalidArgument("Password is required", field="password")

        if UserService.get_user_by_username(session, username):
            raise Conflict("Username already taken", field="username")

        try:
            user = User(username=username, password=password_hash, is_admin=is_admin)
            session.add(user)
            session.commit()
            logger.info(f"Created user {user.id} ({username})")
            return user
        except Exception as e:
            session.rollback()
            logger.error(f"Error creating user {username}: {e}")
            raise

    @staticmethod
    def list_users_with_profiles(session: Session) -> List[Dict[str, Any]]:
        """Admin listing of every account together with its profile, if any"""
        users = session.query(User).order_by(User.id).all()
        result = [{"user": user, "profile": user.profile} for user in users]
        logger.debug(f"Listed {len(result)} users for admin")
        return result

    @staticmethod
    def get_stats(session: Session) -> Dict[str, int]:
        return {
            "total_users": session.query(User).count(),
            "total_profiles": session.query(Profile).count(),
            "total_interests": session.query(Interest).count(),
            "pending_interests": session.query(Interest).filter_by(status=PENDING).count(),
            "accepted_interests": session.query(Interest).filter_by(status=ACCEPTED).count(),
            "total_messages": session.query(Message).count(),
        }
