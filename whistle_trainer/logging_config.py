"""Centralized logging configuration for Whistle Trainer.

This module provides a consistent way to configure logging across the application.
"""

import logging
import sys
from typing import Optional

# Log levels for different modules
MODULE_LOG_LEVELS = {
    # Core modules
    "whistle_trainer": logging.INFO,
    "whistle_trainer.trainer": logging.INFO,
    "whistle_trainer.session": logging.INFO,
    "whistle_trainer.timer": logging.INFO,
    # Signal processing, noisy at DEBUG (one line per cycle)
    "whistle_trainer.detection": logging.INFO,
    # Exercise components
    "whistle_trainer.exercise": logging.INFO,  # Set to DEBUG for rejected notes
    "whistle_trainer.audio": logging.INFO,
    "whistle_trainer.core": logging.INFO,
    "whistle_trainer.cli": logging.INFO,
    # Libraries/third-party
    "sounddevice": logging.WARNING,
    # Root logger
    "": logging.ERROR,
}

# Shared console handler
_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'whistle_trainer' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    # Create a single, shared console handler if it doesn't exist
    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)
    else:
        _console_handler.setStream(sys.stdout)

    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("whistle_trainer"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    # Only the package root and the root logger get the handler; children
    # propagate up to "whistle_trainer" so each record is printed once.
    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name)
        logger.setLevel(module_level)
        if module_name in ("", "whistle_trainer", "sounddevice"):
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
            logger.addHandler(_console_handler)
            logger.propagate = False

    logging.getLogger("whistle_trainer").info("Logging configuration complete")
