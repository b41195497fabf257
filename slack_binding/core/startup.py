"""Application startup and shutdown lifecycle management."""

from contextlib import asynccontextmanager
import structlog
from fastapi import FastAPI

from slack_binding.adapters import SettingLookup, SlackAdapter
from slack_binding.config import settings, create_config_store
from slack_binding.core.workflows import (
    WorkflowRegistry,
    register_slack_workflows,
    initialize_slack_config,
)

logger = structlog.get_logger()


def build_components(
    app: FastAPI,
    initial_config: dict = None,
    store=None,
    app_settings=None,
    **adapter_kwargs,
):
    """
    Wire store, lookup, adapter and registry into app.state.

    Args:
        app: The FastAPI application
        initial_config: Explicit Slack configuration (wins over persisted values)
        store: ConfigStore to use instead of the settings-driven one
        app_settings: Settings to use instead of the global instance
        adapter_kwargs: Extra SlackAdapter arguments (transport, sleep)
    """
    app_settings = app_settings or settings
    app_settings.validate_critical_config()

    if store is None:
        store = create_config_store(app_settings)

    integration_manager = initialize_slack_config(initial_config, store, app_settings)
    logger.info(
        "slack_config_initialized",
        persistent=store.persistent,
        integration_manager=integration_manager is not None,
    )

    lookup = SettingLookup(store, integration_manager)
    slack_adapter = SlackAdapter(
        lookup,
        base_url=app_settings.slack_base_url,
        timeout=app_settings.http_timeout_seconds,
        **adapter_kwargs,
    )

    registry = WorkflowRegistry()
    register_slack_workflows(registry, slack_adapter)
    logger.info("workflows_registered")

    app.state.config_store = store
    app.state.setting_lookup = lookup
    app.state.slack_adapter = slack_adapter
    app.state.workflow_registry = registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan management for startup/shutdown.
    """
    logger.info("application_starting")

    if not hasattr(app.state, "workflow_registry"):
        build_components(app)

    logger.info("application_ready")

    yield

    logger.info("application_stopped")
