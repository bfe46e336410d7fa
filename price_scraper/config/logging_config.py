# price_scraper/config/logging_config.py

"""Per-run log file shared by price_scraper and the web stack.

A run (CLI search, TUI, health check or HTTP server) writes one
``logs/run_YYYYMMDD_HHMMSS.log``. Besides the ``price_scraper.*``
loggers, the uvicorn and FastAPI loggers are pointed at the same
handlers so that request lines and server errors land next to the
discovery and extraction records of the same run.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from price_scraper.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | "
    "%(module)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGER = "price_scraper"

# Third-party loggers routed into the run log, with their floor level
WEB_LOGGERS: dict[str, int] = {
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.INFO,
    "fastapi": logging.INFO,
}


def _current_log_file(logger: logging.Logger) -> Path | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def _run_handlers(log_file: Path) -> list[logging.Handler]:
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )
    return [file_handler, console_handler]


def setup_logging() -> Path:
    """Attach the run handlers and return the run's log file.

    Calling it again reuses the handlers (and file) of the first call.
    """
    app_logger = logging.getLogger(APP_LOGGER)
    existing = _current_log_file(app_logger)
    if existing is not None:
        return existing

    Settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = Settings.LOGS_DIR / f"run_{stamp}.log"
    handlers = _run_handlers(log_file)

    app_logger.setLevel(logging.DEBUG)
    for handler in handlers:
        app_logger.addHandler(handler)

    for name, level in WEB_LOGGERS.items():
        web_logger = logging.getLogger(name)
        web_logger.setLevel(level)
        # Child uvicorn loggers reach these handlers through "uvicorn"
        if "." not in name:
            for handler in handlers:
                web_logger.addHandler(handler)
            web_logger.propagate = False

    app_logger.info("Logging initialised, log file: %s", log_file)
    return log_file
