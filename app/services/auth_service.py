"""
Authentication Service - user lookups and JWT management
"""
from typing import Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import storage_errors
from app.core.security import create_access_token
from app.models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        with storage_errors(self.db, "fetching a user by ID"):
            return self.db.query(User).filter(User.id == user_id).first()

    def create_access_token_for_user(self, user: User) -> str:
        """Create JWT access token for user"""
        logger.info(f"Issuing access token for user: {user.id}")
        return create_access_token(data={"sub": str(user.id)})
