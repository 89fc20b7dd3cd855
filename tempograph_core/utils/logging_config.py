# tempograph_core/utils/logging_config.py
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .config import SETTINGS


def setup_logging(log_file: Optional[str] = None, level: Union[int, str, None] = None):
    """
    Configure logging for the entire application.

    Library modules only call logging.getLogger(__name__); nothing is
    configured until an application calls this. Defaults come from SETTINGS.
    """
    log_file = log_file or SETTINGS.log_file
    if level is None:
        level = SETTINGS.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Create logs directory if it doesn't exist
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Create formatter
    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # File handler
    file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers (if any)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # Add new handlers
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    root_logger.info("=" * 60)
    root_logger.info("Logging configured successfully")
    root_logger.info(f"Log file: {log_path.absolute()}")
    root_logger.info("=" * 60)

    return root_logger
