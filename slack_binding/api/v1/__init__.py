"""API v1 module - consolidated router for all endpoints."""

from fastapi import APIRouter
from slack_binding.api.v1.routes import (
    health_router,
    slack_router,
    workflows_router,
    config_router,
)

# Create main v1 router
router = APIRouter()

# Include all route modules
router.include_router(health_router)
router.include_router(slack_router)
router.include_router(workflows_router)
router.include_router(config_router)

__all__ = ['router']
