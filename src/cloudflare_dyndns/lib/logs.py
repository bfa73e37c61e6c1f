"""
Logging setup for Cloudflare DynDNS
"""
import logging
import os
from typing import Optional

from .config import Config, ConfigError

LOGGER_NAME = "cloudflare_dyndns"
LOG_FILE_NAME = "cloudflare-dyndns.log"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: Optional[Config] = None, debug: bool = False) -> logging.Logger:
    """
    Configure the package logger

    Args:
        config: Configuration; its log_file_path selects the log directory
            (empty disables the log file)
        debug: Also log to stderr at DEBUG level

    Returns:
        logging.Logger: The configured package logger

    Raises:
        ConfigError: If the log file cannot be opened
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if config is not None and config.log_file_path:
        log_file = os.path.join(config.log_file_path, LOG_FILE_NAME)
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Error opening log file: {str(e)}")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    if debug:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
