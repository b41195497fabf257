"""Data models and schemas."""

from slack_binding.models.schemas import (
    EventType,
    SendSlackMessage,
    WorkflowResultResponse,
    ConfigValueUpdate,
    ConfigValueResponse,
    HealthResponse
)

__all__ = [
    'EventType',
    'SendSlackMessage',
    'WorkflowResultResponse',
    'ConfigValueUpdate',
    'ConfigValueResponse',
    'HealthResponse'
]
