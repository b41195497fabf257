"""Health check endpoint."""

from datetime import datetime
from fastapi import APIRouter, Depends

from slack_binding.api.v1.dependencies import get_setting_lookup
from slack_binding.models.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(lookup = Depends(get_setting_lookup)):
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().timestamp(),
        channel_configured=bool(lookup.channel()),
    )
