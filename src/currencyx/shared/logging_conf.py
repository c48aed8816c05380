# src/currencyx/shared/logging_conf.py
"""
Logging Configuration - Logging Setup for Host Applications

Library modules only create module loggers; nothing is configured until the
host calls setup_logging. Every argument left as None is taken from settings
(LOG_FILE, LOG_DIR, CURRENCYX_LOG_STDOUT, LOG_MAX_BYTES, LOG_BACKUP_COUNT),
so a deployment can steer logging through the environment alone.

Files that USE this module:
- Host applications (setup_logging function for logging initialization)
- tests.test_logging_conf (unit tests)

Files that this module USES:
- currencyx.config.settings (logging defaults)
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "currencyx.log"

PathLike = Union[str, Path]


def _resolve_log_path(log_file: Optional[PathLike], log_dir: Optional[PathLike]) -> Optional[Path]:
    """log_dir wins over log_file; parent directories are created."""
    if log_dir:
        path = Path(log_dir) / LOG_FILE_NAME
    elif log_file:
        path = Path(log_file)
    else:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def setup_logging(
    level=logging.INFO,
    log_file: Optional[PathLike] = None,
    log_dir: Optional[PathLike] = None,
    max_bytes: Optional[int] = None,
    backup_count: Optional[int] = None,
    log_stdout: Optional[bool] = None,
) -> Optional[Path]:
    """
    Configure root logging for stdout, a rotating file, or both.

    Existing root handlers are replaced so repeated calls do not duplicate output.

    Args:
        level: Logging level (default: logging.INFO)
        log_file: Log file path (defaults to settings.log_file)
        log_dir: Directory holding currencyx.log (defaults to settings.log_dir)
        max_bytes: Size per file before rotation (defaults to settings.log_max_bytes)
        backup_count: Rotated files to keep (defaults to settings.log_backup_count)
        log_stdout: Also log to stdout (defaults to settings.log_stdout)

    Returns:
        Path of the log file in use, or None when logging to stdout only
    """
    # Import settings here to avoid circular dependency
    from currencyx.config.settings import settings

    if log_file is None and log_dir is None:
        log_file, log_dir = settings.log_file, settings.log_dir
    if max_bytes is None:
        max_bytes = settings.log_max_bytes
    if backup_count is None:
        backup_count = settings.log_backup_count
    if log_stdout is None:
        log_stdout = settings.log_stdout

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers: List[logging.Handler] = []
    log_path = _resolve_log_path(log_file, log_dir)

    if log_path is not None:
        handlers.append(RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"))
    # Stdout is kept when it is the only possible output
    if log_stdout or not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)

    log = logging.getLogger(__name__)
    log.info("Logging configured: file=%s, stdout=%s, level=%s", log_path, bool(log_stdout), logging.getLevelName(level))
    return log_path
