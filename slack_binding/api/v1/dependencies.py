"""Shared dependencies for API routes."""

from fastapi import Request

from slack_binding.adapters import SettingLookup, SlackAdapter
from slack_binding.config import ConfigStore
from slack_binding.core import WorkflowRegistry


def get_slack_adapter(request: Request) -> SlackAdapter:
    """Get Slack adapter from app state."""
    return request.app.state.slack_adapter


def get_workflow_registry(request: Request) -> WorkflowRegistry:
    """Get workflow registry from app state."""
    return request.app.state.workflow_registry


def get_config_store(request: Request) -> ConfigStore:
    """Get local configuration store from app state."""
    return request.app.state.config_store


def get_setting_lookup(request: Request) -> SettingLookup:
    """Get the credential/channel lookup from app state."""
    return request.app.state.setting_lookup
