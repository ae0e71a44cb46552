"""
Event model
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.utils.time_utils import utc_now


class Event(Base):
    """Event created by a user that other users can assist to"""
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    image = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)

    # Schedule (column names kept from the existing schema)
    event_start_date = Column("eventStart_date", DateTime, nullable=False)
    event_end_date = Column("eventEnd_date", DateTime, nullable=False)

    n_participators = Column(Integer, nullable=True)  # capacity
    type = Column(String(100), nullable=True)

    # Creation timestamp
    date = Column(DateTime, default=utc_now)

    # Relationships
    owner = relationship("User", back_populates="events")
    assistances = relationship("Assistance", back_populates="event")

    def has_finished(self, now: Optional[datetime] = None) -> bool:
        """Check if the event end date has already passed"""
        return self.event_end_date < (now or utc_now())
