"""Logging setup for reclaim runs."""

import getpass
import logging
import socket
from datetime import datetime
from pathlib import Path

from reclaim import __version__
from reclaim.config import CleanupConfig

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("reclaim")


def _console_level(config: CleanupConfig) -> int:
    if config.quiet:
        return logging.ERROR
    if config.verbose:
        return logging.INFO
    return logging.WARNING


def _write_header(log_file: Path, command: str, config: CleanupConfig) -> None:
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "unknown"
    header = [
        "=" * 42,
        f"reclaim {command} - Log",
        "=" * 42,
        f"Timestamp: {datetime.now():%Y-%m-%d %H:%M:%S}",
        f"Platform: {config.platform.value}",
        f"Hostname: {socket.gethostname()}",
        f"User: {user}",
        f"Version: {__version__}",
        f"Flags: MODE={config.mode.value}, VERBOSE={config.verbose}, "
        f"QUIET={config.quiet}, MIN_AGE={config.min_age_days}",
        "=" * 42,
        "",
    ]
    log_file.write_text("\n".join(header) + "\n")


def setup_logging(config: CleanupConfig, command: str = "reclaim") -> Path | None:
    """
    Configure the reclaim logger for one run.

    Console output goes to stderr. When the log directory is writable, every
    record at DEBUG and above is also written to
    <log_dir>/<command>-YYYYmmdd-HHMMSS.log.

    Args:
        config: Run configuration (verbosity, log directory)
        command: Name used in the log file name

    Returns:
        Path of the log file, or None if file logging is disabled
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_console_level(config))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    log_dir = Path(config.log_dir).expanduser()
    log_file = log_dir / f"{command}-{datetime.now():%Y%m%d-%H%M%S}.log"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        _write_header(log_file, command, config)
    except OSError as e:
        logger.warning("Cannot create log directory: %s (logging disabled): %s", log_dir, e)
        return None

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    logger.info("Logging initialized: %s", log_file)
    return log_file
