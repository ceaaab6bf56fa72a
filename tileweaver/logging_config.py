"""
Centralized logging configuration for TileWeaver.

Log file: <data_dir>/debug.log (with rotation)

Usage:
    from tileweaver.logging_config import setup_logging
    setup_logging(data_dir)  # Call once at startup

All tileweaver.* loggers write DEBUG to file, WARNING+ to console.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime


LOG_FILE_NAME = "debug.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5

ROOT_LOGGER = "tileweaver"

_logging_initialized = False


def setup_logging(
    data_dir: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    console: bool = True,
) -> Path:
    """
    Configure the logging system for TileWeaver.

    Args:
        data_dir: Directory for the log file
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)
        console: Attach a stderr handler. The TUI turns this off so log
                 lines do not scribble over the screen.

    Returns:
        Path to the log file
    """
    global _logging_initialized

    data_path = Path(data_dir)
    data_path.mkdir(parents=True, exist_ok=True)
    log_path = data_path / LOG_FILE_NAME

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers (for re-initialization)
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-35s | %(funcName)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    if console:
        console_formatter = logging.Formatter(
            fmt="%(levelname)-8s | %(name)-25s | %(message)s"
        )
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"TileWeaver logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_path.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_path


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger configured as child of the tileweaver logger
    """
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_storage(
    logger: logging.Logger,
    operation: str,
    path: Path | str | None = None,
    success: bool = True,
    details: str | None = None,
) -> None:
    """Log document storage operations."""
    status = "OK" if success else "FAILED"
    path_str = f" | {path}" if path else ""
    details_str = f" | {details}" if details else ""
    level = logging.DEBUG if success else logging.ERROR
    logger.log(level, f"STORAGE | {operation}{path_str} | {status}{details_str}")


def log_edit(
    logger: logging.Logger,
    tile: str,
    weight: str,
    details: str | None = None,
) -> None:
    """Log a weight edit applied to the registry."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"EDIT | {tile} | weight={weight}{details_str}")


def log_regenerate(
    logger: logging.Logger,
    status: str,
    removed: int | None = None,
    produced: int | None = None,
    duration_ms: int | None = None,
) -> None:
    """Log a regeneration cycle."""
    removed_str = f" | removed={removed}" if removed is not None else ""
    produced_str = f" | produced={produced}" if produced is not None else ""
    duration_str = f" | {duration_ms}ms" if duration_ms else ""
    logger.info(f"REGENERATE | {status}{removed_str}{produced_str}{duration_str}")
