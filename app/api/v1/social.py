"""
Social/Friends API endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.core.dependencies import get_current_user
from app.schemas.outcome import OutcomeResponse
from app.schemas.user import UserPublic
from app.schemas.social import (
    FriendListResponse,
    PendingRequestsResponse,
    FriendshipCheckResponse,
)
from app.services.friendship_service import FriendshipService
from app.services.auth_service import AuthService
from app.api.v1.helpers import outcome_response

router = APIRouter(prefix="/friends", tags=["friends"])
logger = logging.getLogger(__name__)


@router.get("", response_model=FriendListResponse)
async def get_friends(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get current user's friends list"""
    friends = FriendshipService(db).get_friends(current_user.id)
    return FriendListResponse(
        friends=[UserPublic.model_validate(friend) for friend in friends],
        total_count=len(friends)
    )


@router.get("/requests", response_model=PendingRequestsResponse)
async def get_pending_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get users that have sent a friend request to the current user"""
    requesters = FriendshipService(db).get_potential_friends(current_user.id)
    return PendingRequestsResponse(
        incoming=[UserPublic.model_validate(user) for user in requesters],
        incoming_count=len(requesters)
    )


@router.get("/check/{user_id}", response_model=FriendshipCheckResponse)
async def check_friendship(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Check if you are friends with another user"""
    is_friend = FriendshipService(db).are_friends(current_user.id, user_id)
    return FriendshipCheckResponse(user_id=user_id, is_friend=is_friend)


@router.post("/{user_id}", response_model=OutcomeResponse)
async def send_friend_request(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Send a friend request to another user

    If that user had already sent you a request, it is accepted instead.
    """
    if AuthService(db).get_user_by_id(user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="External user does not exist"
        )

    outcome = FriendshipService(db).create_friend_request(current_user.id, user_id)
    logger.info(f"Friend request {current_user.id} -> {user_id}: {outcome.value}")
    return outcome_response(outcome)


@router.put("/{user_id}", response_model=OutcomeResponse)
async def accept_friend_request(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Accept the friend request sent by another user"""
    outcome = FriendshipService(db).accept_friend_request(current_user.id, user_id)
    return outcome_response(outcome)


@router.delete("/{user_id}", response_model=OutcomeResponse)
async def delete_friend_request_or_friendship(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Reject/cancel a friend request or remove a friend"""
    outcome = FriendshipService(db).delete_friend_request_or_friendship(current_user.id, user_id)
    return outcome_response(outcome)
