"""Structured logging utilities with request context support."""

import contextvars
import functools
import logging
import uuid
from typing import Any, Callable, Dict, Optional, cast

# Context-local log fields. A ContextVar (rather than thread-local storage)
# follows a request from the ASGI event loop into the threadpool that runs
# synchronous FastAPI endpoints.
_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "ticktock_log_context", default={}
)

# Sensitive field names to redact
SENSITIVE_FIELDS = {
    "password",
    "token",
    "secret",
    "session",
    "cookie",
    "authorization",
}

REDACTED = "***REDACTED***"


def generate_correlation_id() -> str:
    """
    Generate a unique correlation ID for tracking requests.

    Returns:
        UUID string to use as correlation ID
    """
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from the log context.

    Returns:
        Current correlation ID or None if not set
    """
    return _log_context.get().get("correlation_id")


class LogContext:
    """
    Context manager for adding structured fields to log records.

    Fields are visible to every log record emitted inside the block,
    including records from nested calls.

    Example:
        with LogContext(correlation_id=generate_correlation_id(), week_id="week-1"):
            logger.info("Appending entry")
    """

    def __init__(self, **kwargs):
        self.fields = kwargs
        self._token: Optional[contextvars.Token] = None

    def __enter__(self):
        merged = dict(_log_context.get())
        merged.update(self.fields)
        self._token = _log_context.set(merged)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


class _ContextFilter(logging.Filter):
    """Logging filter that adds context fields to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            setattr(record, key, value)
        return True


def sanitize_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sanitize sensitive fields in a dictionary.

    Values of keys containing a sensitive name (case-insensitive) are
    replaced, nested dictionaries are processed recursively.

    Args:
        data: Dictionary to sanitize

    Returns:
        Sanitized copy of the dictionary
    """
    if not isinstance(data, dict):
        return data

    sanitized: Dict[str, Any] = {}

    for key, value in data.items():
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_FIELDS):
            sanitized[key] = REDACTED if value is not None else None
        elif isinstance(value, dict):
            sanitized[key] = sanitize_sensitive_data(cast(Dict[str, Any], value))
        else:
            sanitized[key] = value

    return sanitized


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Decorator to log function entry and exit.

    Exceptions are logged with traceback and re-raised.

    Args:
        func: Function to decorate (when used without arguments)
        include_args: Whether to include function arguments in logs
        level: Log level to use (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Decorated function

    Example:
        @log_function_call(include_args=True)
        def append_entry(self, week_id, draft):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                signature = ", ".join(args_repr + kwargs_repr)
                logger.log(log_level, f"Entering {f.__qualname__} with args: {signature}")
            else:
                logger.log(log_level, f"Entering {f.__qualname__}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Exception in {f.__qualname__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            logger.log(log_level, f"Exiting {f.__qualname__}")
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)
