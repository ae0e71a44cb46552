"""
Assistance model - a user's attendance to an event
"""
from sqlalchemy import Column, Integer, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class Assistance(Base):
    """Attendance record with the optional post-event rating"""
    __tablename__ = "assistances"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    event_id = Column(Integer, ForeignKey("events.id"), primary_key=True, index=True)

    # Filled in once the event has finished
    comment = Column(Text, nullable=True)
    punctuation = Column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint(
            'punctuation IS NULL OR (punctuation >= 0 AND punctuation <= 10)',
            name='assistance_punctuation_range'
        ),
    )

    # Relationships
    user = relationship("User", back_populates="assistances")
    event = relationship("Event", back_populates="assistances")
