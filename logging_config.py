"""Logging configuration for the GitLab webhook sync tool."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Set up console logging, plus a rotating file log when ``log_file`` is given."""
    level = logging.DEBUG if debug else logging.INFO
    detailed_formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(detailed_formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    # aiohttp access noise stays at INFO even in debug runs
    logging.getLogger("aiohttp").setLevel(logging.INFO)

    return root_logger
