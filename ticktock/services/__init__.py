"""
Session storage services for ticktock.

This package provides:
- A KeyValueStore protocol with in-memory and server-side session
  implementations
- AdditionsRepository, which loads and saves the session's additions blob
  and degrades to empty additions when the store misbehaves
"""

from .additions_repository import STORAGE_KEY, AdditionsRepository
from .key_value_store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    ServerSessionKeyValueStore,
    SessionDataBackend,
)

__all__ = [
    "STORAGE_KEY",
    "AdditionsRepository",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "ServerSessionKeyValueStore",
    "SessionDataBackend",
]
