"""
Database models for Social Events Backend

All models should be imported here for Alembic to detect them.
"""
from app.models.user import User
from app.models.event import Event
from app.models.social import Friendship, FriendshipStatus, Message
from app.models.assistance import Assistance

__all__ = [
    # User
    "User",
    # Event
    "Event",
    # Social
    "Friendship",
    "FriendshipStatus",
    "Message",
    # Assistance
    "Assistance",
]
