"""Key-value store interface."""

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Interface for persisting JSON-compatible snapshots under string keys."""

    def load(self, key: str) -> Any | None:
        """Return the value saved under key, or None if absent or unreadable."""
        ...

    def save(self, key: str, value: Any) -> bool:
        """Persist value under key. Returns False instead of raising on failure."""
        ...
