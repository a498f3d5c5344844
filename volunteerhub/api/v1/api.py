# File: volunteerhub/api/v1/api.py
from fastapi import APIRouter
from volunteerhub.api.v1.endpoints import (
    auth,
    users,
    events,
    event_status,
    event_requests,
    event_actions,
    credits,
    rewards,
    chat,
)

# Create main API router
api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    event_status.router,
    prefix="/events",
    tags=["event-status"]
)

api_router.include_router(
    event_requests.router,
    prefix="/events",
    tags=["event-requests"]
)

api_router.include_router(
    event_actions.router,
    prefix="/events",
    tags=["event-actions"]
)

api_router.include_router(
    chat.router,
    prefix="/events",
    tags=["chat"]
)

api_router.include_router(
    credits.router,
    prefix="/credits",
    tags=["credits"]
)

api_router.include_router(
    rewards.router,
    prefix="/rewards",
    tags=["rewards"]
)
