"""Ports - interfaces/protocols for external dependencies."""

from .store import KeyValueStore

__all__ = [
    "KeyValueStore",
]
