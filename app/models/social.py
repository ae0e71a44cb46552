"""
Social features models - Friends, friend requests and direct messages
"""
from enum import IntEnum
from sqlalchemy import Column, Integer, DateTime, Text, ForeignKey, UniqueConstraint
from app.database import Base
from app.utils.time_utils import utc_now


class FriendshipStatus(IntEnum):
    """Stored status of a friends row"""
    PENDING = 0
    ACCEPTED = 1


class Friendship(Base):
    """
    Single row per pair of users.

    While PENDING it is a request from user_id to user_id_friend; once ACCEPTED
    it is a symmetric friendship, still stored with the original requester in
    user_id.
    """
    __tablename__ = "friends"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    user_id_friend = Column(Integer, ForeignKey("users.id"), primary_key=True, index=True)

    # Status: FriendshipStatus.PENDING / FriendshipStatus.ACCEPTED
    status = Column(Integer, nullable=False, default=FriendshipStatus.PENDING)

    # Unordered pair in canonical order, unique to prevent (A, B) and (B, A)
    pair_low = Column(Integer, nullable=False)
    pair_high = Column(Integer, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    __table_args__ = (
        UniqueConstraint('pair_low', 'pair_high', name='unique_friendship_pair'),
    )

    def __init__(self, **kwargs):
        user_id = kwargs.get("user_id")
        user_id_friend = kwargs.get("user_id_friend")
        if user_id is not None and user_id_friend is not None:
            kwargs.setdefault("pair_low", min(user_id, user_id_friend))
            kwargs.setdefault("pair_high", max(user_id, user_id_friend))
        super().__init__(**kwargs)

    @property
    def is_pending(self) -> bool:
        return self.status == FriendshipStatus.PENDING


class Message(Base):
    """Direct message between two users"""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    user_id_send = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    user_id_received = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    timestamp = Column(DateTime, default=utc_now)
