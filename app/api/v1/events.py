"""
Event attendance endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.core.dependencies import get_current_user
from app.schemas.assistance import (
    AssistanceResponse,
    EventAssistant,
    EventAssistantListResponse,
)
from app.schemas.outcome import OutcomeResponse
from app.services.assistance_service import AssistanceService
from app.api.v1.helpers import outcome_response, get_event_or_404, get_user_or_404

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/{event_id}/assistances", response_model=EventAssistantListResponse)
async def get_event_assistances(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get all users assisting to an event with their ratings"""
    get_event_or_404(db, event_id)

    rows = AssistanceService(db).get_event_assistances(event_id)
    assistants = [
        EventAssistant(
            id=user.id,
            name=user.name,
            last_name=user.last_name,
            email=user.email,
            image=user.image,
            punctuation=assistance.punctuation,
            comment=assistance.comment
        )
        for user, assistance in rows
    ]
    return EventAssistantListResponse(assistants=assistants, total_count=len(assistants))


@router.get("/{event_id}/assistances/{user_id}", response_model=AssistanceResponse)
async def get_user_event_assistance(
    event_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get the assistance of a user for an event"""
    get_event_or_404(db, event_id)
    get_user_or_404(db, user_id)

    assistance = AssistanceService(db).get_user_event_assistance(event_id, user_id)
    if assistance is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assistance does not exist or was not found"
        )
    return assistance


@router.delete("/{event_id}/assistances", response_model=OutcomeResponse)
async def leave_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Stop assisting to an event"""
    get_event_or_404(db, event_id)

    assistance_service = AssistanceService(db)
    assistance = assistance_service.get_assistance_of_user_for_event(current_user.id, event_id)
    if assistance is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assistance does not exist or was not found"
        )

    outcome = assistance_service.delete_assistance(assistance)
    return outcome_response(outcome)
