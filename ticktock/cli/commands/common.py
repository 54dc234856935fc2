"""Shared setup for CLI commands."""

from pathlib import Path
from typing import Optional

from ticktock.aggregators.reconciler import TimesheetReconciler
from ticktock.cli.error_handlers import ConfigurationError
from ticktock.config.logging_config import LoggingConfig, configure_logging
from ticktock.config.settings import TicktockConfig, get_config
from ticktock.data.baseline import load_baseline
from ticktock.services.additions_repository import STORAGE_KEY, AdditionsRepository
from ticktock.services.key_value_store import InMemoryKeyValueStore


def setup_command(debug: bool = False) -> TicktockConfig:
    """Load settings and configure logging for a command."""
    config = get_config()
    logging_config = LoggingConfig.from_env(default_level=config.log_level)
    if debug or config.debug:
        logging_config.log_level = "DEBUG"
    configure_logging(logging_config)
    return config


def build_reconciler(
    config: TicktockConfig,
    baseline_file: Optional[str] = None,
    additions_file: Optional[str] = None,
) -> TimesheetReconciler:
    """Create a reconciler for offline use.

    Args:
        config: Settings
        baseline_file: Baseline JSON file overriding ``config.baseline_file``
        additions_file: Optional file holding an exported session additions
            blob; it is read as-is, so unreadable content falls back to the
            baseline like it does in the web app

    Raises:
        ConfigurationError: If the additions file cannot be read
    """
    baseline = load_baseline(baseline_file or config.baseline_file)

    store = InMemoryKeyValueStore()
    if additions_file:
        try:
            store.set(STORAGE_KEY, Path(additions_file).read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read additions file {additions_file}: {e}",
                recovery_hint="Pass the path of a JSON file exported from a session",
            ) from e

    return TimesheetReconciler(
        baseline,
        AdditionsRepository(store),
        completed_threshold=config.completed_hours_threshold,
    )
