"""Slack send/receive binding for workflow automation."""

# Configuration
from slack_binding.config import (
    settings,
    ConfigStore,
    JsonFileBackend,
    MemoryBackend,
)

# Adapters
from slack_binding.adapters import (
    IntegrationManager,
    SettingLookup,
    SlackAdapter,
    is_error,
)

# Workflow bindings
from slack_binding.core import (
    WorkflowRegistry,
    UnknownEventError,
    register_slack_workflows,
    initialize_slack_config,
)

# Models and schemas
from slack_binding.models import (
    EventType,
    SendSlackMessage,
)

__version__ = "1.0.0"

__all__ = [
    # Config
    'settings',
    'ConfigStore',
    'JsonFileBackend',
    'MemoryBackend',
    # Adapters
    'IntegrationManager',
    'SettingLookup',
    'SlackAdapter',
    'is_error',
    # Workflows
    'WorkflowRegistry',
    'UnknownEventError',
    'register_slack_workflows',
    'initialize_slack_config',
    # Models
    'EventType',
    'SendSlackMessage',
]
