from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint, text
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"
STATUSES = (PENDING, ACCEPTED, REJECTED)

class Interest(Base):
    __tablename__ = "interests"
    __table_args__ = (
        CheckConstraint("sender_id <> receiver_id", name="ck_interests_not_self"),
        CheckConstraint("status IN (%s)" % ", ".join(f"'{s}'" for s in STATUSES), name="ck_interests_status"),
        # at most one pending interest per ordered pair
        Index(
            "uq_interests_pending_pair", "sender_id", "receiver_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )

    id = Column(Integer, primary_key=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(10), default=PENDING, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])

class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])
