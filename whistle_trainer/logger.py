"""Centralized lazy-loading logger configuration for Whistle Trainer."""
import logging
from typing import Dict

# Root of the logger hierarchy configured by logging_config.setup_logging
PACKAGE_LOGGER = "whistle_trainer"

# Module-level cache for loggers
_logger_cache: Dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """
    Get a lazily initialized logger under the package hierarchy.

    Names outside the package (e.g. '__main__' when a module is run as a
    script) are nested under 'whistle_trainer' so their records reach the
    package handler instead of the root logger, which only passes errors.

    Args:
        name: The full module name (e.g., 'whistle_trainer.session')

    Returns:
        A configured logger instance
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    if name not in _logger_cache:
        _logger_cache[name] = logging.getLogger(name)
    return _logger_cache[name]
