import os
import sys
import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

# Loggers owned by this project: the app package and the fetchers
LOGGER_NAMES = ("magfinder", "sources")

logger = logging.getLogger("magfinder")
debug_logger = logging.getLogger("magfinder.debug")

_FILE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Attach handlers to the project loggers.

    stderr gets bare messages so stdout stays clean for results; the optional
    rotating file gets timestamps. Safe to call more than once.
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter('%(message)s'))

    file_handler = None
    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))

    for name in LOGGER_NAMES:
        target = logging.getLogger(name)
        target.setLevel(numeric_level)
        for handler in list(target.handlers):
            if getattr(handler, "_magfinder", False):
                target.removeHandler(handler)
                handler.close()
        for handler in (stream_handler, file_handler):
            if handler is not None:
                handler._magfinder = True
                target.addHandler(handler)


def debug_log_event(event: dict) -> None:
    """Write a structured event as one compact JSON line at DEBUG level."""
    if not debug_logger.isEnabledFor(logging.DEBUG):
        return
    try:
        debug_logger.debug(json.dumps(event, ensure_ascii=True, separators=(',', ':')))
    except (TypeError, ValueError) as exc:
        logger.info(f"⚠️ Debug log failure: {exc}")
