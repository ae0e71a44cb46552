"""
Shared helpers for API v1 endpoints
"""
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.outcomes import FriendRequestOutcome, Outcome
from app.models.event import Event
from app.models.user import User
from app.schemas.outcome import OutcomeResponse
from app.services.auth_service import AuthService
from app.services.event_service import EventService

# Outcomes that are reported as client errors; everything else is 200
OUTCOME_HTTP_STATUS = {
    FriendRequestOutcome.CANNOT_SELF_REQUEST: status.HTTP_400_BAD_REQUEST,
    FriendRequestOutcome.CANNOT_SELF_ACCEPT: status.HTTP_400_BAD_REQUEST,
    FriendRequestOutcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def outcome_response(outcome: Outcome) -> OutcomeResponse:
    """Build the response for an outcome, raising for the ones mapped to 4xx"""
    response = OutcomeResponse.from_outcome(outcome)
    status_code = OUTCOME_HTTP_STATUS.get(outcome, status.HTTP_200_OK)
    if status_code >= 400:
        raise HTTPException(status_code=status_code, detail=response.model_dump())
    return response


def get_user_or_404(db: Session, user_id: int) -> User:
    user = AuthService(db).get_user_by_id(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User does not exist or was not found"
        )
    return user


def get_event_or_404(db: Session, event_id: int) -> Event:
    event = EventService(db).get_event_by_id(event_id)
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event does not exist or was not found"
        )
    return event
