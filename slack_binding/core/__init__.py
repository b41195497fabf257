"""Core workflow bindings."""

from slack_binding.core.workflows import (
    WorkflowRegistry,
    UnknownEventError,
    register_slack_workflows,
    initialize_slack_config
)

__all__ = [
    'WorkflowRegistry',
    'UnknownEventError',
    'register_slack_workflows',
    'initialize_slack_config'
]
