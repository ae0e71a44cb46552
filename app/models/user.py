"""
User model
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from app.database import Base
from app.utils.time_utils import utc_now


class User(Base):
    """User account model"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Password hash, never serialized back to clients
    password = Column(String(255), nullable=False)
    image = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)

    # Relationships
    events = relationship("Event", back_populates="owner")
    assistances = relationship("Assistance", back_populates="user")
