"""
Centralized error handling and logging system.

This module provides:
- The project logger ("crawlcore") and its file/console handlers
- Custom exception types for content and configuration problems
- log_error() for reporting a caught exception with context

Simulation code never raises for gameplay outcomes (blocked moves, failed
casts, unsolvable floors); these exceptions are for broken content or config.
"""
import logging
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional

# Default logging directory
LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

logger = logging.getLogger("crawlcore")
logger.addHandler(logging.NullHandler())


def configure_logging(log_dir: Optional[Path] = None, console_level: int = logging.WARNING) -> logging.Logger:
    """
    Attach a dated file handler (DEBUG) and a console handler to the project
    logger. Safe to call more than once.
    """
    log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.setLevel(logging.DEBUG)

    # Prevent duplicate handlers
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        log_file = log_dir / f"crawl_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )

        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(
            logging.Formatter('%(levelname)s: %(message)s')
        )

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

    return logger


class GameError(Exception):
    """Base exception for game-specific errors."""
    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class ConfigError(GameError):
    """Error while loading or saving configuration."""
    pass


class ContentError(GameError):
    """Error in static content (item catalog entries, enemy archetypes)."""
    pass


def log_error(
    error: Exception,
    context: str = "",
    user_message: Optional[str] = None,
) -> None:
    """
    Log an error with context information.

    Args:
        error: The exception that occurred
        context: Where the error occurred (e.g., "load_config", "register_archetype")
        user_message: Optional friendlier summary, logged alongside
    """
    error_type = type(error).__name__
    error_msg = str(error)
    trace = traceback.format_exc()

    logger.error(f"Error in {context}: {error_type}: {error_msg}\n{trace}")
    if user_message:
        logger.info(f"{context}: {user_message}")
