"""
Configuration module for ticktock.
"""
from .logging_config import LoggingConfig, configure_logging, reset_logging
from .settings import TicktockConfig, get_config, load_config, reload_config

__all__ = [
    "TicktockConfig",
    "get_config",
    "load_config",
    "reload_config",
    "LoggingConfig",
    "configure_logging",
    "reset_logging",
]
