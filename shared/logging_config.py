# =============================================================================
# FOREX JOURNAL FEEDS - LOGGING CONFIGURATION
# =============================================================================
#
# Logs are separated by data source:
# - Calendar feed logs go to logs/calendar/
# - Signal feed logs go to logs/signals/
# - Everything else goes to logs/feeds/
#
# The source handlers are attached to every package logger the source
# covers, so module loggers (logging.getLogger(__name__)) write through them.
#
# =============================================================================

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .enums import DataSource


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# LOG DIRECTORIES (relative to project root)
# =============================================================================

def _get_project_root() -> Path:
    """Get the project root directory."""
    # This file is at shared/logging_config.py
    return Path(__file__).parent.parent


def _get_logger_name(source: Optional[DataSource] = None) -> str:
    if source is None:
        return "feeds"
    return source.value


def _get_log_dir(source: Optional[DataSource] = None, log_root: Optional[Path] = None) -> Path:
    """Get the log directory for a specific source."""
    root = log_root or (_get_project_root() / "logs")
    return root / _get_logger_name(source)


def _get_package_loggers(source: Optional[DataSource] = None) -> List[str]:
    """Package loggers that report under a source."""
    if source == DataSource.CALENDAR:
        return ["calendar_feed", "acquisition"]
    elif source == DataSource.SIGNALS:
        return ["signals", "acquisition"]
    return ["calendar_feed", "signals", "acquisition", "shared"]


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    source: Optional[DataSource] = None,
    level: int = logging.INFO,
    console_output: bool = True,
    file_output: bool = True,
    log_root: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure logging for a data source.

    Args:
        source: The source to configure logging for (None for all feeds)
        level: Logging level
        console_output: Whether to log to console
        file_output: Whether to log to file
        log_root: Override for the logs/ directory

    Returns:
        The configured source logger
    """
    logger_name = _get_logger_name(source)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: List[logging.Handler] = []

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    log_file = None
    if file_output:
        log_dir = _get_log_dir(source, log_root)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{logger_name}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Package loggers share the source handlers; clear first to avoid duplicates
    for package in _get_package_loggers(source):
        package_logger = logging.getLogger(package)
        package_logger.setLevel(level)
        package_logger.handlers.clear()
        for handler in handlers:
            package_logger.addHandler(handler)
        package_logger.propagate = False

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)

    # Reduce noise from urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger.info(f"Logging initialized for {logger_name}")
    if log_file is not None:
        logger.info(f"Log file: {log_file}")

    return logger


def get_source_logger(source: Optional[DataSource] = None) -> logging.Logger:
    """
    Get the logger for a specific source.

    Args:
        source: The source to get logger for

    Returns:
        Logger instance (configured once setup_logging() has run)
    """
    return logging.getLogger(_get_logger_name(source))
