"""
Logging setup shared by every entry point of the package.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from .config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Optional[Settings] = None, log_to_file: bool = True) -> logging.Logger:
    """
    Configure root logging with console and (optionally) file handlers.

    Args:
        settings: Application settings, defaults to the cached instance
        log_to_file: Also append to ``LOGS_DIR_NAME/LOG_FILENAME``

    Returns:
        The package logger
    """
    settings = settings or get_settings()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        logs_dir = Path(settings.LOGS_DIR_NAME)
        logs_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logs_dir / settings.LOG_FILENAME, mode="a"))

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger("production_accounting")
