"""In-memory key-value store for ephemeral runs."""

from dataclasses import dataclass, field

from farm_dashboard.services.persistence import KeyValueStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Keeps blobs in a dict for the process lifetime."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
