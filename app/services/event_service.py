"""
Event service - event lookups used by the attendance endpoints
"""
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import storage_errors
from app.models.event import Event


class EventService:
    """Service for event operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_event_by_id(self, event_id: int) -> Optional[Event]:
        """Get event by ID"""
        with storage_errors(self.db, "fetching an event by ID"):
            return self.db.query(Event).filter(Event.id == event_id).first()
