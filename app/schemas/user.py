"""
User schemas
"""
from typing import Optional
from pydantic import BaseModel


class UserPublic(BaseModel):
    """User info safe to return to other users (no password)"""
    id: int
    name: str
    last_name: str
    email: str
    image: Optional[str] = None

    class Config:
        from_attributes = True
