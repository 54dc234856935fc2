"""Identifier generation for sessions and user-created entries and weeks."""

import random
import secrets
import string
import time

_ALPHABET = string.ascii_lowercase + string.digits


def _suffix(length: int = 9) -> str:
    return "".join(random.choice(_ALPHABET) for _ in range(length))


def generate_entry_id() -> str:
    """Return a new entry id such as ``entry-1719878400000-k3j9x0a2q``."""
    return f"entry-{int(time.time() * 1000)}-{_suffix()}"


def generate_week_id() -> str:
    """Return a new week id such as ``week-1719878400000-p0x7m2c1d``."""
    return f"week-{int(time.time() * 1000)}-{_suffix()}"


def generate_session_id() -> str:
    """Return an unguessable id for server-side session data."""
    return secrets.token_urlsafe(32)
