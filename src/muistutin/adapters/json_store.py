"""File-based JSON key-value store adapter."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    JSON file storage.

    Implements KeyValueStore protocol. Each key gets its own .json file.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a key (':' is not portable in file names)."""
        return self.data_dir / f"{key.replace(':', '_')}.json"

    def load(self, key: str) -> Any | None:
        """Return the value saved under key, or None if absent or unreadable."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text())
        # ValueError covers bad JSON and bad UTF-8
        except (ValueError, OSError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return None

    def save(self, key: str, value: Any) -> bool:
        """Persist value under key. Returns False instead of raising on failure."""
        path = self._path_for_key(key)
        try:
            tmp = path.with_suffix(".json.tmp")
            tmp.write_text(json.dumps(value, indent=2))
            tmp.replace(path)
        except (OSError, TypeError) as e:
            logger.warning(f"Failed to save {path}: {e}")
            return False
        return True

    def exists(self, key: str) -> bool:
        return self._path_for_key(key).exists()
