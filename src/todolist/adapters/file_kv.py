"""File-based key-value storage adapter."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileKeyValueStore:
    """
    JSON-file key-value storage.

    Implements KeyValueStore protocol. All keys live in a single JSON object
    file; values are strings. A missing or corrupt file reads as empty.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, str]:
        """Read every stored key."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (ValueError, OSError) as e:
            logger.warning(f"Failed to read storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: expected a JSON object")
            return {}
        return data

    def get_item(self, key: str) -> str | None:
        """Read the value stored under key. Returns None if not found."""
        value = self._read_all().get(key)
        if value is None:
            return None
        return str(value)

    def set_item(self, key: str, value: str) -> None:
        """Write/overwrite the value stored under key."""
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
