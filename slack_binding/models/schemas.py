"""
Pydantic schemas for workflow events and API requests/responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal, Any
from enum import Enum
from datetime import datetime


# ============================================================================
# Enums
# ============================================================================


class EventType(str, Enum):
    """Workflow events bound to Slack operations"""

    SEND_SLACK_MESSAGE = "slack.send_message"


# ============================================================================
# Workflow Events
# ============================================================================


class SendSlackMessage(BaseModel):
    """Event payload for posting a message to Slack"""

    channel: str = Field(..., description="Requested channel (the configured channel is used)")
    message: str = Field(..., description="Message text")

    model_config = {
        "json_schema_extra": {
            "example": {
                "channel": "#deployments",
                "message": "Deploy to production finished"
            }
        }
    }


# ============================================================================
# API Schemas
# ============================================================================


class WorkflowResultResponse(BaseModel):
    """
    Result of a Slack operation, passed through unchanged.
    Either a string (timestamp token or reply text) or {"error": "..."}.
    """

    result: Any = None


class ConfigValueUpdate(BaseModel):
    """Request to set a configuration value"""

    value: str = Field(..., min_length=1)


class ConfigValueResponse(BaseModel):
    """Configuration value (secrets masked)"""

    key: str
    value: Optional[str] = None
    configured: bool = False


class HealthResponse(BaseModel):
    """Health check response"""

    status: Literal["healthy", "unhealthy"]
    timestamp: float = Field(default_factory=lambda: datetime.now().timestamp())
    version: str = "1.0.0"
    channel_configured: bool = False
