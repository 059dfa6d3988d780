"""
Logging Configuration

Console plus a size-rotated file under LOG_DIR. Services log through the
shared "resume_manager" logger.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.core.config import settings

LOGGER_NAME = "resume_manager"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that drown out request logs
QUIET_LOGGERS = ("uvicorn.access", "multipart", "python_multipart")


def setup_logging(level: str = None, log_dir: str = None) -> logging.Logger:
    """Configure root handlers and return the application logger"""
    log_path = Path(log_dir or settings.LOG_DIR)
    log_path.mkdir(parents=True, exist_ok=True)

    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    file_handler = RotatingFileHandler(
        log_path / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout), file_handler],
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger(LOGGER_NAME)


logger = setup_logging()
