"""Loading and saving of session additions.

The session's additions live as one JSON blob under a fixed key. Every
failure on the way in (no store, store unavailable, non-JSON or
wrongly-shaped data) degrades to an empty SessionAdditions so that reads
always fall back to the baseline. Failures on the way out are logged and
reported through the return value.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from ticktock.exceptions import StoreUnavailableError
from ticktock.models.timesheet import SessionAdditions
from ticktock.services.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "additional_timesheet_data"


class AdditionsRepository:
    """Reads and writes SessionAdditions through a KeyValueStore.

    Args:
        store: Session store, or None when there is no session context
            (loads return empty, writes are skipped)
        key: Storage key of the blob

    Example:
        >>> from ticktock.services.key_value_store import InMemoryKeyValueStore
        >>> repository = AdditionsRepository(InMemoryKeyValueStore())
        >>> repository.load().is_empty()
        True
    """

    def __init__(self, store: Optional[KeyValueStore], key: str = STORAGE_KEY):
        self.store = store
        self.key = key

    def load(self) -> SessionAdditions:
        """Load the session's additions, or empty additions on any failure."""
        if self.store is None:
            logger.debug("No session store, using empty additions")
            return SessionAdditions()

        try:
            raw = self.store.get(self.key)
        except StoreUnavailableError as e:
            logger.warning(f"Session store unavailable, using empty additions: {e}")
            return SessionAdditions()

        if raw is None:
            return SessionAdditions()

        try:
            return SessionAdditions.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Discarding unreadable session additions under {self.key!r}: "
                f"{e.error_count()} error(s)"
            )
            return SessionAdditions()

    def save(self, additions: SessionAdditions) -> bool:
        """Persist additions as one blob.

        Returns:
            True if the blob was written, False if the store was unavailable
        """
        if self.store is None:
            logger.debug("No session store, additions not saved")
            return False

        blob = additions.model_dump_json(by_alias=True)
        try:
            self.store.set(self.key, blob)
        except StoreUnavailableError as e:
            logger.warning(f"Could not save session additions: {e}")
            return False

        logger.debug(f"Saved session additions ({len(blob)} bytes)")
        return True

    def clear(self) -> bool:
        """Remove all additions for the session.

        Returns:
            True if the blob was removed, False if the store was unavailable
        """
        if self.store is None:
            return False

        try:
            self.store.remove(self.key)
        except StoreUnavailableError as e:
            logger.warning(f"Could not clear session additions: {e}")
            return False

        logger.info("Cleared session additions")
        return True
