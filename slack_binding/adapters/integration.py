"""
Credential and channel lookup for the Slack adapter.

Two sources are consulted in order: an optional integration manager
(external secret/config provider), then the local ConfigStore. The first
non-empty value wins, so an integration manager that answers with an empty
string still falls through to the store.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog

from slack_binding.config.store import ConfigStore

logger = structlog.get_logger()

SLACK_NAMESPACE = "slack"
API_KEY = "apiKey"
CHANNEL = "channel"


class IntegrationManager(ABC):
    """Contract for external integration config providers."""

    @abstractmethod
    def get_integration_config(self, namespace: str, key: str) -> Optional[str]:
        """
        Look up a setting for an integration.

        Args:
            namespace: Integration name, e.g. "slack"
            key: Setting name, e.g. "apiKey"

        Returns:
            The value, or None/empty when the provider has nothing
        """


class SettingsIntegrationManager(IntegrationManager):
    """Integration manager backed by environment settings (SLACK_API_KEY, SLACK_CHANNEL)."""

    def __init__(self, settings):
        self._values = {
            SLACK_NAMESPACE: {
                API_KEY: settings.slack_api_key,
                CHANNEL: settings.slack_channel,
            }
        }

    def get_integration_config(self, namespace: str, key: str) -> Optional[str]:
        return self._values.get(namespace, {}).get(key)


def load_integration_manager(settings) -> Optional[IntegrationManager]:
    """
    Return the integration manager for this process, or None when absent.

    Absence is normal: the adapter then relies on the local store only.
    """
    if not settings.has_integration_values():
        logger.info("integration_manager_unavailable", fallback="local_config_store")
        return None

    logger.info("integration_manager_loaded", source="environment")
    return SettingsIntegrationManager(settings)


class SettingLookup:
    """First-non-empty-wins composition of integration manager and local store."""

    def __init__(self, store: ConfigStore, integration_manager: Optional[IntegrationManager] = None):
        self.store = store
        self.integration_manager = integration_manager

    def resolve(self, key: str) -> Optional[str]:
        if self.integration_manager is not None:
            try:
                value = self.integration_manager.get_integration_config(SLACK_NAMESPACE, key)
            except Exception as e:
                logger.warning("integration_manager_lookup_failed", key=key, error=str(e))
                value = None
            if value:
                return value

        return self.store.get(key)

    def api_key(self) -> Optional[str]:
        return self.resolve(API_KEY)

    def channel(self) -> Optional[str]:
        return self.resolve(CHANNEL)
