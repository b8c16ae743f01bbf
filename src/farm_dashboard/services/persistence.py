"""Durable mirror of in-memory state in a local key-value store."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

ANIMALS_KEY = "farm_animals"
STATS_KEY = "farm_stats"
CACHE_KEY = "farm_cache"
CACHE_EXPIRY_KEY = "farm_cache_expiry"
WIDGETS_KEY = "dashboard_widgets"

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """String key-value storage local to one profile."""

    def get_item(self, key: str) -> str | None:
        """Return the stored string for a key, if any."""

    def set_item(self, key: str, value: str) -> None:
        """Store a string under a key."""

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class PersistenceGateway:
    """Loads and saves named JSON blobs.

    Storage and serialization errors are logged and swallowed: callers keep
    working from their in-memory state when durability is unavailable.
    """

    store: KeyValueStore

    def load(self, key: str) -> object | None:
        """Return the decoded blob for a key, or None if absent or malformed."""
        try:
            raw = self.store.get_item(key)
        except Exception:
            _logger.exception("Failed to read %s from storage", key)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            _logger.exception("Discarding malformed %s blob", key)
            return None

    def save(self, key: str, data: object) -> bool:
        """Serialize and store a blob; return False when it was not saved."""
        try:
            raw = json.dumps(data)
            self.store.set_item(key, raw)
        except Exception:
            _logger.exception("Failed to save %s to storage", key)
            return False
        return True

    def remove(self, key: str) -> None:
        """Erase a blob."""
        try:
            self.store.remove_item(key)
        except Exception:
            _logger.exception("Failed to remove %s from storage", key)
