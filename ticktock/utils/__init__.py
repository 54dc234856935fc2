"""Shared utilities."""

from ticktock.utils.logging_utils import (
    LogContext,
    generate_correlation_id,
    get_correlation_id,
    log_function_call,
    sanitize_sensitive_data,
)

__all__ = [
    "LogContext",
    "generate_correlation_id",
    "get_correlation_id",
    "log_function_call",
    "sanitize_sensitive_data",
]
