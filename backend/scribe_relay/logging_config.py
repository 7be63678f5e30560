import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import TextIO

from scribe_relay.config import settings

LOG_FILE_NAME = "scribe_relay.log"


def setup_logging(log_dir: str | None = None, level: str | None = None, stream: TextIO | None = None) -> None:
    """
    Configures logging for the application.
    Outputs to console and, when a log directory is configured, to a rotating
    file with the same detailed format.
    """
    log_dir = settings.LOG_DIR if log_dir is None else log_dir
    level = level or settings.LOG_LEVEL
    stream = stream or sys.stdout

    log_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid adding handlers multiple times (uvicorn --reload, tests)
    has_console_handler = any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is stream
        for h in root_logger.handlers
    )
    if not has_console_handler:
        console_handler = logging.StreamHandler(stream)
        console_handler.setFormatter(log_formatter)
        root_logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        has_file_handler = any(isinstance(h, RotatingFileHandler) for h in root_logger.handlers)
        if not has_file_handler:
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, LOG_FILE_NAME), maxBytes=1024 * 1024 * 5, backupCount=2
            )  # 5MB per file, 2 backups
            file_handler.setFormatter(log_formatter)
            root_logger.addHandler(file_handler)

    logging.getLogger("scribe_relay").setLevel(level)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    # httpx logs every request at INFO; our client already logs its calls.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.info("Logging configured successfully (console%s).", " and file" if log_dir else " only")
