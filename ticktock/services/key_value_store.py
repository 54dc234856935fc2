"""Session-scoped key/value stores.

The reconciler never talks to a storage backend directly. It reads and
writes one JSON blob through the small :class:`KeyValueStore` protocol.
The web app keeps that blob server-side in a :class:`SessionDataBackend`
and only puts an opaque session id in the signed cookie; a persistent
backend can replace it without touching reconciliation.
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional, Protocol

from ticktock.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal string key/value store scoped to one session.

    Implementations raise StoreUnavailableError when the backing storage
    cannot be used.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Dictionary-backed store for tests and command-line use.

    Args:
        initial: Optional initial contents
        available: When False every operation raises StoreUnavailableError
    """

    def __init__(
        self, initial: Optional[Dict[str, str]] = None, available: bool = True
    ):
        self._data: Dict[str, str] = dict(initial or {})
        self.available = available

    def _check_available(self) -> None:
        if not self.available:
            raise StoreUnavailableError("In-memory store is marked unavailable")

    def get(self, key: str) -> Optional[str]:
        self._check_available()
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check_available()
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._check_available()
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class SessionDataBackend:
    """Server-side values for every browser session, keyed by session id.

    Only the session id travels in the signed cookie, so the size of a
    session's data is not bounded by browser cookie limits. Sessions that
    have not been touched for ``max_age`` seconds are purged on the next
    read or write.

    Args:
        max_age: Idle lifetime of a session's data in seconds, or None to
            keep data until it is removed
        clock: Monotonic time source
    """

    def __init__(
        self,
        max_age: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_age = max_age
        self._clock = clock
        self._data: Dict[str, Dict[str, str]] = {}
        self._touched: Dict[str, float] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str, key: str) -> Optional[str]:
        with self._lock:
            self._purge_expired()
            values = self._data.get(session_id)
            if values is None:
                return None
            self._touched[session_id] = self._clock()
            return values.get(key)

    def set(self, session_id: str, key: str, value: str) -> None:
        with self._lock:
            self._purge_expired()
            self._data.setdefault(session_id, {})[key] = value
            self._touched[session_id] = self._clock()

    def remove(self, session_id: str, key: str) -> None:
        with self._lock:
            values = self._data.get(session_id)
            if values is None:
                return
            values.pop(key, None)
            if not values:
                del self._data[session_id]
                self._touched.pop(session_id, None)

    def for_session(self, session_id: Optional[str]) -> "ServerSessionKeyValueStore":
        """Return a KeyValueStore view of one session's data."""
        return ServerSessionKeyValueStore(self, session_id)

    def __len__(self) -> int:
        return len(self._data)

    def _purge_expired(self) -> None:
        if self.max_age is None:
            return
        cutoff = self._clock() - self.max_age
        expired = [sid for sid, touched in self._touched.items() if touched < cutoff]
        for session_id in expired:
            self._data.pop(session_id, None)
            del self._touched[session_id]
        if expired:
            logger.debug(f"Purged {len(expired)} idle session(s)")


class ServerSessionKeyValueStore:
    """Store for one browser session, backed by a SessionDataBackend.

    Args:
        backend: Shared server-side backend
        session_id: Id kept in the session cookie, or None when the request
            has no session (middleware not installed)
    """

    def __init__(self, backend: SessionDataBackend, session_id: Optional[str]):
        self._backend = backend
        self.session_id = session_id

    def _require_session_id(self) -> str:
        if not self.session_id:
            raise StoreUnavailableError("No session is attached to this request")
        return self.session_id

    def get(self, key: str) -> Optional[str]:
        return self._backend.get(self._require_session_id(), key)

    def set(self, key: str, value: str) -> None:
        self._backend.set(self._require_session_id(), key, value)

    def remove(self, key: str) -> None:
        self._backend.remove(self._require_session_id(), key)
