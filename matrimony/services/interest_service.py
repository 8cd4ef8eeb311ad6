from sqlalchemy import or_, and_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from matrimony.models import *
from matrimony.core.errors import Conflict, Forbidden, InvalidArgument, NotFound
from enum import Enum
from typing import List, Tuple
import logging

logger = logging.getLogger(__name__)


class InterestView(str, Enum):
    SENT = "sent"
    RECEIVED = "received"
    MATCHES = "matches"


DECISIONS = tuple(status for status in STATUSES if status != PENDING)


class InterestService:
    """Interest lifecycle: pending -> accepted | rejected, accepted -> rejected on unmatch.

    Matches are not stored; a user's matches are the counterparts of every
    accepted interest they sent or received.
    """

    @staticmethod
    def send_interest(session: Session, sender_id: int, receiver_id: int) -> Interest:
        if sender_id == receiver_id:
            raise InvalidArgument("You cannot send interest to yourself", field="receiver_id")
        for user_id in (sender_id, receiver_id):
            if not session.query(User.id).filter_by(id=user_id).first():
                raise NotFound(f"User {user_id} not found")

        existing = session.query(Interest).filter(
            Interest.sender_id == sender_id,
            Interest.receiver_id == receiver_id,
            Interest.status.in_((PENDING, ACCEPTED))
        ).first()
        if existing:
            raise Conflict(f"Interest already {existing.status}")

        try:
            interest = Interest(sender_id=sender_id, receiver_id=receiver_id, status=PENDING)
            session.add(interest)
            session.commit()
        except IntegrityError as e:
            # a concurrent request inserted the pending row first
            session.rollback()
            logger.warning(f"Duplicate pending interest {sender_id} -> {receiver_id}: {e}")
            raise Conflict("Interest already pending")
        except Exception as e:
            session.rollback()
            logger.error(f"Error sending interest from {sender_id} to {receiver_id}: {e}")
            raise

        logger.info(f"User {sender_id} sent interest {interest.id} to user {receiver_id}")
        return interest

    @staticmethod
    def get_interest(session: Session, interest_id: int) -> Interest:
        interest = session.query(Interest).filter_by(id=interest_id).first()
        if not interest:
            raise NotFound(f"Interest {interest_id} not found")
        return interest

    @staticmethod
    def list_interests(session: Session, user_id: int, view: InterestView) -> List[Tuple[Interest, Profile]]:
        """Interests seen by user_id, each joined to the other side's profile, newest first"""
        view = InterestView(view)
        order = (Interest.created_at.desc(), Interest.id.desc())

        if view == InterestView.SENT:
            rows = session.query(Interest, Profile).join(
                Profile, Profile.user_id == Interest.receiver_id
            ).filter(Interest.sender_id == user_id).order_by(*order).all()
        elif view == InterestView.RECEIVED:
            rows = session.query(Interest, Profile).join(
                Profile, Profile.user_id == Interest.sender_id
            ).filter(Interest.receiver_id == user_id).order_by(*order).all()
        else:
            rows = session.query(Interest, Profile).join(
                Profile,
                or_(
                    and_(Interest.sender_id == user_id, Profile.user_id == Interest.receiver_id),
                    and_(Interest.receiver_id == user_id, Profile.user_id == Interest.sender_id),
                )
            ).filter(Interest.status == ACCEPTED).order_by(*order).all()

            seen = set()
            unique_rows = []
            for interest, profile in rows:
                if profile.user_id in seen:
                    continue
                seen.add(profile.user_id)
                unique_rows.append((interest, profile))
            rows = unique_rows

        logger.debug(f"Found {len(rows)} {view.value} interests for user {user_id}")
        return rows

    @staticmethod
    def resolve_interest(session: Session, interest_id: int, acting_user_id: int, decision: str) -> Interest:
        """Receiver accepts or rejects a pending interest"""
        if decision not in DECISIONS:
            raise InvalidArgument(f"Status must be one of {', '.join(DECISIONS)}", field="status")

        interest = InterestService.get_interest(session, interest_id)
        if interest.receiver_id != acting_user_id:
            raise Forbidden("Only the receiver can respond to this interest")
        if interest.status != PENDING:
            raise Conflict(f"Interest already {interest.status}")

        return InterestService._transition(session, interest, PENDING, decision)

    @staticmethod
    def remove_match(session: Session, interest_id: int, acting_user_id: int) -> Interest:
        """Either side of an accepted interest may withdraw from the match"""
        interest = InterestService.get_interest(session, interest_id)
        if acting_user_id not in (interest.sender_id, interest.receiver_id):
            raise Forbidden("You are not part of this match")
        if interest.status != ACCEPTED:
            raise Conflict("Interest is not an active match")

        return InterestService._transition(session, interest, ACCEPTED, REJECTED)

    @staticmethod
    def are_matched(session: Session, user_a: int, user_b: int) -> bool:
        return session.query(Interest.id).filter(
            Interest.status == ACCEPTED,
            or_(
                and_(Interest.sender_id == user_a, Interest.receiver_id == user_b),
                and_(Interest.sender_id == user_b, Interest.receiver_id == user_a),
            )
        ).first() is not None

    @staticmethod
    def _transition(session: Session, interest: Interest, expected: str, status: str) -> Interest:
        """Move the interest to status only if it is still in the expected state"""
        interest_id = interest.id
        try:
            updated = session.query(Interest).filter(
                Interest.id == interest_id,
                Interest.status == expected
            ).update({Interest.status: status}, synchronize_session=False)
            if updated:
                session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Error moving interest {interest_id} from {expected} to {status}: {e}")
            raise

        if not updated:
            session.rollback()
            logger.warning(f"Interest {interest_id} left {expected} before it could move to {status}")
            raise Conflict(f"Interest is no longer {expected}")

        session.refresh(interest)
        logger.info(f"Interest {interest_id} moved from {expected} to {status}")
        return interest
