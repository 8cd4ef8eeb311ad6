from sqlalchemy import or_, and_, func
from sqlalchemy.orm import Session
from matrimony.models import *
from matrimony.core import config
from matrimony.core.errors import Forbidden, InvalidArgument, NotFound
from matrimony.services.interest_service import InterestService
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, require_match: Optional[bool] = None):
        self.require_match = config.REQUIRE_MATCH_FOR_MESSAGES if require_match is None else require_match

    def send_message(self, session: Session, sender_id: int, receiver_id: int, content: str) -> Message:
        content = (content or "").strip()
        if not content:
            raise InvalidArgument("Message cannot be empty", field="content")
        if sender_id == receiver_id:
            raise InvalidArgument("You cannot message yourself", field="receiver_id")
        if not session.query(User.id).filter_by(id=receiver_id).first():
            raise NotFound(f"User {receiver_id} not found")
        if self.require_match and not InterestService.are_matched(session, sender_id, receiver_id):
            raise Forbidden("You can only message your matches")

        try:
            message = Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
            session.add(message)
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Error sending message from {sender_id} to {receiver_id}: {e}")
            raise

        logger.debug(f"User {sender_id} sent message {message.id} to user {receiver_id}")
        return message

    @staticmethod
    def list_messages(session: Session, user_a: int, user_b: int) -> List[Message]:
        """Both directions of a conversation, oldest first"""
        return session.query(Message).filter(
            or_(
                and_(Message.sender_id == user_a, Message.receiver_id == user_b),
                and_(Message.sender_id == user_b, Message.receiver_id == user_a),
            )
        ).order_by(Message.created_at.asc(), Message.id.asc()).all()

    @staticmethod
    def list_conversations(session: Session, user_id: int) -> List[Profile]:
        """Profiles of everyone user_id has exchanged messages with, latest exchange first"""
        sent = session.query(
            Message.receiver_id, func.max(Message.id)
        ).filter(Message.sender_id == user_id).group_by(Message.receiver_id).all()
        received = session.query(
            Message.sender_id, func.max(Message.id)
        ).filter(Message.receiver_id == user_id).group_by(Message.sender_id).all()

        last_seen = {}
        for counterpart_id, last_id in sent + received:
            last_seen[counterpart_id] = max(last_id, last_seen.get(counterpart_id, 0))

        if not last_seen:
            return []

        profiles = session.query(Profile).filter(Profile.user_id.in_(last_seen.keys())).all()
        profiles.sort(key=lambda p: last_seen[p.user_id], reverse=True)
        logger.debug(f"Found {len(profiles)} conversations for user {user_id}")
        return profiles
