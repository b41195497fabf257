"""
Main FastAPI application - Slack workflow binding.
"""

import logging
import os
import structlog
from fastapi import FastAPI

from slack_binding.api.v1 import router as api_v1_router
from slack_binding.config import settings
from slack_binding.core.startup import lifespan


def configure_logging(log_level: str = "INFO", log_format: str = "json"):
    """Configure structured logging"""
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
    )


configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()


# ============================================================================
# FastAPI Application
# ============================================================================

def create_app() -> FastAPI:
    """Build the application; components are wired in the lifespan"""
    application = FastAPI(
        title="Slack Workflow Binding",
        description="Send Slack messages from workflows and await threaded replies",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Include all v1 API routes
    application.include_router(api_v1_router)

    return application


app = create_app()

# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    host = os.getenv("HOST", "0.0.0.0")
    reload = os.getenv("RELOAD", "false").lower() == "true"

    logger.info(
        "starting_server",
        host=host,
        port=port,
        reload=reload
    )

    uvicorn.run(
        "main:app" if reload else app,
        host=host,
        port=port,
        reload=reload
    )
