"""Directory-backed key-value store."""

import re
from dataclasses import dataclass
from pathlib import Path

from farm_dashboard.services.persistence import KeyValueStore

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores each key as ``<key>.json`` inside one directory."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileKeyValueStore":
        """Create a store, making the directory if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{_SAFE_KEY.sub('_', key)}.json"
