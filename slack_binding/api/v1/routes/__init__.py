"""API v1 route modules."""

from slack_binding.api.v1.routes.health import router as health_router
from slack_binding.api.v1.routes.slack import router as slack_router
from slack_binding.api.v1.routes.workflows import router as workflows_router
from slack_binding.api.v1.routes.config import router as config_router

__all__ = [
    'health_router',
    'slack_router',
    'workflows_router',
    'config_router',
]
