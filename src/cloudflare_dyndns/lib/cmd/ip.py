"""
IP command implementation for Cloudflare DynDNS
"""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import ConfigError
from ..ip.ipify import IpifyClient, IPResolutionError
from .context import load_context

console = Console()


def ip_command(config_path: Optional[Path] = None, debug: bool = False) -> None:
    """Print the public IP address"""
    try:
        config, logger = load_context(config_path, debug)
        client = IpifyClient.from_config(config, logger=logger.getChild("ipify"))
        address = client.get_public_ip()
        logger.info(f"Public IP address is {address}")
        console.print(address, markup=False, highlight=False)
    except ConfigError as e:
        console.print(f"[bold red]Configuration error: {escape(str(e))}")
        raise typer.Exit(code=1)
    except IPResolutionError as e:
        console.print(f"[bold red]Error: Failed to retrieve public IP: {escape(str(e))}")
        raise typer.Exit(code=1)
