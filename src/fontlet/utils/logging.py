import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_LEVEL_ENV_VAR = "FONTLET_LOG_LEVEL"
LOG_DIR_ENV_VAR = "FONTLET_LOG_DIR"
DEFAULT_LOG_SUBDIR = Path(".fontlet") / "logs"
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MiB
BACKUP_COUNT = 5
LOG_FILENAME = "fontlet.log"


def _resolve_log_directory() -> Path:
    """Return the directory where log files should be written."""

    log_dir = os.getenv(LOG_DIR_ENV_VAR)
    if log_dir:
        path = Path(log_dir).expanduser()
    else:
        path = Path.home() / DEFAULT_LOG_SUBDIR

    path.mkdir(parents=True, exist_ok=True)
    return path


def _configure_root(logger: logging.Logger, log_level: str) -> None:
    level = getattr(logging, log_level, logging.INFO)
    logger.setLevel(level)

    if logger.handlers:
        # Already configured; respect existing handlers.
        return

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s"
    )

    # File only: the TUI owns stdout/stderr while it runs.
    file_handler = RotatingFileHandler(
        _resolve_log_directory() / LOG_FILENAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=BACKUP_COUNT,
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    logger.addHandler(file_handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``fontlet`` hierarchy writing to the rolling log file."""

    log_level = os.getenv(LOG_LEVEL_ENV_VAR, "INFO").upper()
    _configure_root(logging.getLogger("fontlet"), log_level)
    if name != "fontlet" and not name.startswith("fontlet."):
        name = f"fontlet.{name}"
    return logging.getLogger(name)
