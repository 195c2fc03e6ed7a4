"""
UAE Laws Registry Logging Configuration

Provides consistent logging setup across all registry modules.
Configurable via environment variables and supports console and file output.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_DIR = Path("logs")

# Environment variable names
ENV_LOG_LEVEL = "UAE_LAWS_LOG_LEVEL"
ENV_LOG_FORMAT = "UAE_LAWS_LOG_FORMAT"
ENV_LOG_DIR = "UAE_LAWS_LOG_DIR"


def setup_logging(
    name: str,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    console: bool = True,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Set up logging with the registry's standard format.

    Args:
        name: Logger name (usually __name__ or the package name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               Defaults to UAE_LAWS_LOG_LEVEL env var or INFO
        log_file: Optional log file name (created in log_dir)
        log_dir: Directory for log files
                Defaults to UAE_LAWS_LOG_DIR env var or "./logs"
        console: Whether to output to console (default: True)
        format_string: Custom format string
        date_format: Custom date format string
        stream: Console stream (default: sys.stdout)

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logging("uae_laws", stream=sys.stderr)
        >>> logger = setup_logging(__name__, level="DEBUG", log_file="sync.log")
    """
    if level is None:
        level = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)

    if format_string is None:
        format_string = os.getenv(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)

    if date_format is None:
        date_format = DEFAULT_DATE_FORMAT

    if log_dir is None:
        log_dir_str = os.getenv(ENV_LOG_DIR)
        log_dir = Path(log_dir_str) if log_dir_str else DEFAULT_LOG_DIR

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(format_string, datefmt=date_format)

    if console:
        console_handler = logging.StreamHandler(stream or sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(getattr(logging, level.upper()))
        logger.addHandler(console_handler)

    if log_file:
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(getattr(logging, level.upper()))
        logger.addHandler(file_handler)

    return logger

