"""
JWT helpers for backend access tokens
"""
from datetime import timedelta
from typing import Any, Dict, Optional

import jwt

from app.core.config import settings
from app.utils.time_utils import utc_now


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token

    Args:
        data: Claims to encode, must include "sub" with the user id
        expires_delta: Token lifetime, defaults to JWT_ACCESS_TOKEN_EXPIRE_MINUTES
    """
    to_encode = data.copy()
    expire = utc_now() + (expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT access token

    Raises:
        jwt.InvalidTokenError: If the token is invalid or expired
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
