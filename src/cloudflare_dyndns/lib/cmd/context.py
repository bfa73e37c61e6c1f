"""
Shared setup for command implementations
"""
import logging
from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console
from rich.markup import escape

from ..config import Config
from ..dns.base import APIError, DNSError
from ..logs import setup_logging
from ..utils import mask_token


def load_context(config_path: Optional[Path] = None, debug: bool = False) -> Tuple[Config, logging.Logger]:
    """Load configuration and configure logging for a command"""
    config = Config.load(config_path)
    logger = setup_logging(config, debug=debug)
    logger.debug(f"Using config file: {config.source}")
    logger.debug(f"Using API token: {mask_token(config.api_token)}")
    return config, logger


def print_dns_error(console: Console, logger: logging.Logger, message: str, error: DNSError) -> None:
    """Print and log a DNS error together with any provider error entries"""
    if not isinstance(error, APIError):
        logger.error(f"{message}: {error}")
        console.print(f"[bold red]{escape(message)}: {escape(str(error))}")
        return

    logger.error(message)
    console.print(f"[bold red]{escape(message)}")
    for entry in error.errors:
        logger.error(f"DNS record error - {entry.message} (code: {entry.code})")
        console.print(f"[red]{escape(entry.message)} (code: {entry.code})")
