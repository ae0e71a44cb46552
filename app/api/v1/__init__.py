"""
API v1 routes aggregation
"""
from fastapi import APIRouter
from app.api.v1 import auth, users, social, assistances, events

api_router = APIRouter()

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])

# Users
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Social/Friends
api_router.include_router(social.router, tags=["friends"])

# Assistances
api_router.include_router(assistances.router, tags=["assistances"])

# Events
api_router.include_router(events.router, tags=["events"])
