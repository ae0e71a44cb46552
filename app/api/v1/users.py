"""
User endpoints - friends, attended events and statistics of a user
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.core.dependencies import get_current_user
from app.schemas.assistance import (
    AttendedEvent,
    AttendedEventListResponse,
    EventSummary,
    UserStatisticsResponse,
)
from app.schemas.social import FriendListResponse
from app.schemas.user import UserPublic
from app.services.assistance_service import AssistanceService, FUTURE, FINISHED
from app.services.friendship_service import FriendshipService
from app.api.v1.helpers import get_user_or_404

router = APIRouter()


def _attended_events(db: Session, user_id: int, when: Optional[str]) -> AttendedEventListResponse:
    get_user_or_404(db, user_id)

    rows = AssistanceService(db).get_user_assistances(user_id, when)
    events = [
        AttendedEvent(
            **EventSummary.model_validate(event).model_dump(),
            punctuation=assistance.punctuation,
            comment=assistance.comment
        )
        for event, assistance in rows
    ]
    return AttendedEventListResponse(events=events, total_count=len(events))


@router.get("/{user_id}/friends", response_model=FriendListResponse)
async def get_user_friends(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get friends of a user"""
    get_user_or_404(db, user_id)

    friends = FriendshipService(db).get_friends(user_id)
    return FriendListResponse(
        friends=[UserPublic.model_validate(friend) for friend in friends],
        total_count=len(friends)
    )


@router.get("/{user_id}/assistances", response_model=AttendedEventListResponse)
async def get_user_assistances(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get all events a user is assisting to"""
    return _attended_events(db, user_id, None)


@router.get("/{user_id}/assistances/future", response_model=AttendedEventListResponse)
async def get_user_future_assistances(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get events a user is assisting to that have not started yet"""
    return _attended_events(db, user_id, FUTURE)


@router.get("/{user_id}/assistances/finished", response_model=AttendedEventListResponse)
async def get_user_finished_assistances(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get events a user has assisted to that are already over"""
    return _attended_events(db, user_id, FINISHED)


@router.get("/{user_id}/statistics", response_model=UserStatisticsResponse)
async def get_user_statistics(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get user statistics

    - **average_score**: average punctuation received on the user's finished events
    - **number_of_comments**: comments written by the user
    - **percentage_commenters_below**: percentage of users with fewer comments
    """
    get_user_or_404(db, user_id)

    assistance_service = AssistanceService(db)
    return UserStatisticsResponse(
        user_id=user_id,
        average_score=assistance_service.get_user_average_score(user_id),
        number_of_comments=assistance_service.get_user_number_of_comments(user_id),
        percentage_commenters_below=assistance_service.get_user_percentage_commenters_below(user_id)
    )
