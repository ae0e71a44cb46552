"""
Assistance (event attendance) API endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.core.dependencies import get_current_user
from app.schemas.assistance import AssistanceResponse, AssistanceUpdate
from app.schemas.outcome import OutcomeResponse
from app.services.assistance_service import AssistanceService
from app.api.v1.helpers import outcome_response, get_event_or_404, get_user_or_404

router = APIRouter(prefix="/assistances", tags=["assistances"])
logger = logging.getLogger(__name__)


def _assistance_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Assistance does not exist or was not found"
    )


@router.post("/{event_id}", response_model=OutcomeResponse)
async def create_assistance(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Join an event as the current user"""
    get_event_or_404(db, event_id)

    outcome = AssistanceService(db).create_assistance(current_user.id, event_id)
    return outcome_response(outcome)


@router.get("/{user_id}/{event_id}", response_model=AssistanceResponse)
async def get_assistance(
    user_id: int,
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get assistance of a user for an event"""
    get_user_or_404(db, user_id)
    get_event_or_404(db, event_id)

    assistance = AssistanceService(db).get_assistance_of_user_for_event(user_id, event_id)
    if assistance is None:
        raise _assistance_not_found()

    return assistance


@router.put("/{event_id}", response_model=OutcomeResponse)
async def edit_assistance(
    event_id: int,
    changes: AssistanceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Rate and/or comment an event you assisted to

    Only allowed once the event has finished.

    - **punctuation**: integer from 0 to 10
    - **comment**: free text
    """
    event = get_event_or_404(db, event_id)

    assistance_service = AssistanceService(db)
    assistance = assistance_service.get_assistance_of_user_for_event(current_user.id, event_id)
    if assistance is None:
        raise _assistance_not_found()

    if not event.has_finished():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Event has not finished yet"
        )

    outcome = assistance_service.edit_assistance(assistance, changes)
    return outcome_response(outcome)


@router.delete("/{user_id}/{event_id}", response_model=OutcomeResponse)
async def remove_assistant(
    user_id: int,
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Remove a user from an event you own"""
    event = get_event_or_404(db, event_id)

    if event.owner_id != current_user.id:
        logger.warning(
            f"User {current_user.id} tried to remove assistant {user_id} from event {event_id}"
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authenticated user is not the owner of the event"
        )

    assistance_service = AssistanceService(db)
    assistance = assistance_service.get_assistance_of_user_for_event(user_id, event_id)
    if assistance is None:
        raise _assistance_not_found()

    outcome = assistance_service.delete_assistance(assistance)
    return outcome_response(outcome)
