"""
Shared logging utilities.
"""

import logging
import sys

from fintrack.api.middleware.logging import JSONLogFormatter, PIIFilter

# Configure logging format
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure root logger.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        json_format: Emit one JSON object per line instead of plain text
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.addFilter(PIIFilter())
    if json_format:
        console_handler.setFormatter(JSONLogFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Replace handlers so repeated app creation does not duplicate output.
    root_logger.handlers = [console_handler]
