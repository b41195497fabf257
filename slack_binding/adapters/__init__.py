"""External service adapters."""

from slack_binding.adapters.integration import (
    IntegrationManager,
    SettingsIntegrationManager,
    SettingLookup,
    load_integration_manager,
)
from slack_binding.adapters.slack import SlackAdapter, REPLY_WAIT_SECONDS, is_error

__all__ = [
    'IntegrationManager',
    'SettingsIntegrationManager',
    'SettingLookup',
    'load_integration_manager',
    'SlackAdapter',
    'REPLY_WAIT_SECONDS',
    'is_error',
]
