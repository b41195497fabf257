"""
Local configuration store for the Slack integration.

Holds the `apiKey` / `channel` mapping in memory and mirrors it to a
pluggable backend as a single JSON object under a fixed key.

Merge rules:
- values passed to init() always win
- persisted values only fill keys that are still missing
- set() rewrites the whole persisted object
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional

import structlog

logger = structlog.get_logger()

STORAGE_KEY = "slack_integration_config"


class ConfigBackend(ABC):
    """Durable key-value storage for serialized configuration."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the raw stored string for key, or None"""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store the raw string under key"""


class MemoryBackend(ConfigBackend):
    """Process-local backend, mainly for tests and embedding."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileBackend(ConfigBackend):
    """
    JSON file with 0600 permissions.

    Schema:
        {
            "slack_integration_config": "<serialized configuration object>"
        }
    """

    def __init__(self, storage_path: str):
        self.storage_path = os.path.expanduser(storage_path)
        self._ensure_file()

    def _ensure_file(self):
        """Create storage file with secure permissions if it doesn't exist."""
        if not os.path.exists(self.storage_path):
            directory = os.path.dirname(self.storage_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.storage_path, "w") as f:
                json.dump({}, f)
            os.chmod(self.storage_path, 0o600)

    def _load(self) -> dict:
        try:
            with open(self.storage_path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("config_file_unreadable", path=self.storage_path, error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def read(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        with open(self.storage_path, "w") as f:
            json.dump(data, f, indent=2)
        os.chmod(self.storage_path, 0o600)


class ConfigStore:
    """
    In-memory Slack configuration with optional persistence.

    Not safe for unsynchronized concurrent set() calls; the last write wins.
    """

    def __init__(self, backend: Optional[ConfigBackend] = None):
        self._config: Dict[str, str] = {}
        self._backend = backend

    @property
    def persistent(self) -> bool:
        return self._backend is not None

    def init(self, initial: Optional[Dict[str, str]] = None):
        """
        Seed the store from an explicit mapping, then fill gaps from storage.

        Args:
            initial: Explicit configuration; these values are never overridden
        """
        if isinstance(initial, dict):
            for key, value in initial.items():
                self._config[key] = value

        if self._backend is None:
            return

        saved = self._backend.read(STORAGE_KEY)
        if not saved:
            return

        try:
            parsed = json.loads(saved)
            if not isinstance(parsed, dict):
                raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
        except ValueError as e:
            logger.warning("config_parse_failed", error=str(e))
            return

        loaded = 0
        for key, value in parsed.items():
            if key not in self._config:
                self._config[key] = value
                loaded += 1

        logger.debug("config_loaded_from_storage", keys_added=loaded)

    def get(self, key: str) -> Optional[str]:
        return self._config.get(key)

    def set(self, key: str, value: str):
        """Update a value and persist the whole mapping if storage is available"""
        self._config[key] = value

        if self._backend is not None:
            self._backend.write(STORAGE_KEY, json.dumps(self._config))

        logger.info("config_value_set", key=key, persisted=self._backend is not None)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._config)


def create_config_store(settings) -> ConfigStore:
    """Build a store backed by the configured JSON file, or memory-only if disabled"""
    if not settings.config_store_enabled:
        return ConfigStore()
    return ConfigStore(JsonFileBackend(settings.config_store_path))
