"""JSON file implementation of the key-value store."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from smoothie_builder.services.storage import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores all keys in one JSON object on disk; last write wins."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        value = self._read().get(key)
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value)

    def set(self, key: str, value: str) -> None:
        """Write a value, replacing the file atomically."""
        entries = self._read()
        entries[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            _logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Ignoring state file %s: not a JSON object", self.path)
            return {}
        return data
