"""
Init command implementation for Cloudflare DynDNS
"""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import Config, ConfigError


console = Console()


def init_command(config_path: Optional[Path] = None):
    """Initialize Cloudflare DynDNS configuration"""
    try:
        config = Config.initialize_interactive(config_path)
        console.print(f"[bold green]✓ Configuration written to {escape(str(config.source))} (YAML)")
        console.print("\nYou can now run 'cloudflare-dyndns list' and 'cloudflare-dyndns update'.")
    except ConfigError as e:
        console.print(f"[bold red]Configuration error: {escape(str(e))}")
        raise typer.Exit(code=1)
    except OSError as e:
        console.print(f"[bold red]Error: {escape(str(e))}")
        raise typer.Exit(code=1)
