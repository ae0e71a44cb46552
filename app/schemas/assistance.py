"""
Assistance and event attendance schemas
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from app.schemas.user import UserPublic


class AssistanceUpdate(BaseModel):
    """Rate and/or comment an assistance once the event has finished"""
    punctuation: Optional[int] = Field(None, ge=0, le=10, description="Score from 0 to 10")
    comment: Optional[str] = Field(None, description="Free text comment")


class AssistanceResponse(BaseModel):
    """Assistance of a user for an event"""
    user_id: int
    event_id: int
    punctuation: Optional[int] = None
    comment: Optional[str] = None

    class Config:
        from_attributes = True


class EventAssistant(UserPublic):
    """User attending an event, with their rating"""
    punctuation: Optional[int] = None
    comment: Optional[str] = None


class EventSummary(BaseModel):
    """Basic event info"""
    id: int
    owner_id: int
    name: str
    image: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    event_start_date: datetime
    event_end_date: datetime
    n_participators: Optional[int] = None
    type: Optional[str] = None
    date: Optional[datetime] = None

    class Config:
        from_attributes = True


class AttendedEvent(EventSummary):
    """Event attended by a user, with the user's rating"""
    punctuation: Optional[int] = None
    comment: Optional[str] = None


class AttendedEventListResponse(BaseModel):
    """Events a user is attending or has attended"""
    events: List[AttendedEvent]
    total_count: int


class EventAssistantListResponse(BaseModel):
    """Users attending an event"""
    assistants: List[EventAssistant]
    total_count: int


class UserStatisticsResponse(BaseModel):
    """Statistics about a user as event owner and as commenter"""
    user_id: int
    average_score: Optional[float] = None
    number_of_comments: int
    percentage_commenters_below: float
