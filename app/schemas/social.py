"""
Social and friends schemas
"""
from typing import List
from pydantic import BaseModel

from app.schemas.user import UserPublic


class FriendListResponse(BaseModel):
    """Response with list of friends"""
    friends: List[UserPublic]
    total_count: int


class PendingRequestsResponse(BaseModel):
    """Users that have sent a pending friend request to the current user"""
    incoming: List[UserPublic]
    incoming_count: int


class FriendshipCheckResponse(BaseModel):
    """Whether the current user and another user are friends"""
    user_id: int
    is_friend: bool
