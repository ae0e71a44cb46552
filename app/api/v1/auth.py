"""
Authentication endpoints - JWT session management
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.auth import Token
from app.schemas.user import UserPublic
from app.services.auth_service import AuthService
from app.core.dependencies import get_current_user
from app.models.user import User
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/me", response_model=UserPublic)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Get current authenticated user information

    Requires Bearer token in Authorization header.
    """
    return current_user


@router.post("/refresh", response_model=Token)
async def refresh_token(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Refresh JWT token

    Returns a new JWT token for the authenticated user.
    """
    auth_service = AuthService(db)
    access_token = auth_service.create_access_token_for_user(current_user)

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user_id": str(current_user.id)
    }
