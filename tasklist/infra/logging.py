from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tasklist.config import PROJECT_ROOT, SETTINGS, Settings

LOG_FILE_NAME = "tasklist.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class _ConsoleNoiseFilter(logging.Filter):
    """Let tasklist records through; third-party records only at WARNING and above."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "tasklist" or record.name.startswith("tasklist."):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(settings: Settings = SETTINGS) -> Path:
    """Send everything to a rotating log file and a filtered copy to stderr.

    Returns the path of the log file.
    """
    log_dir = PROJECT_ROOT / settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME
    level = settings.log_level.upper()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(
        log_file, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(_ConsoleNoiseFilter())

    logging.basicConfig(level=level, handlers=[file_handler, console_handler], force=True)
    # SQL echo stays out of the log unless explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return log_file
