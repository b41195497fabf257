"""Configuration: environment settings and the local Slack config store."""

from slack_binding.config.settings import Settings, settings
from slack_binding.config.store import (
    STORAGE_KEY,
    ConfigBackend,
    ConfigStore,
    JsonFileBackend,
    MemoryBackend,
    create_config_store,
)

__all__ = [
    'Settings',
    'settings',
    'STORAGE_KEY',
    'ConfigBackend',
    'ConfigStore',
    'JsonFileBackend',
    'MemoryBackend',
    'create_config_store',
]
