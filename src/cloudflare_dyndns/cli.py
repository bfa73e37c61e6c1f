"""
Command-line interface for Cloudflare DynDNS
"""
from typing import List, Optional
from pathlib import Path

import typer

from .lib.cmd import (
    init_command,
    ip_command,
    list_command,
    update_command,
)

app = typer.Typer(
    help="""Update your Cloudflare DNS records with the current or specified IP address.

    Examples:

      cloudflare-dyndns list

      cloudflare-dyndns update

      cloudflare-dyndns update --name my-record.example.com --ip 1.2.3.4
    """
)


class State:
    """Global options shared by all commands"""
    config: Optional[Path] = None
    debug: bool = False


state = State()


@app.callback()
def options(
    config: Optional[Path] = typer.Option(
        None, '--config',
        help='Config file (default searches ./.cloudflare-dyndns, ~/.cloudflare-dyndns, '
             'or ~/.config/cloudflare-dyndns/.cloudflare-dyndns)'
    ),
    debug: bool = typer.Option(False, '--debug', '-d', help='Enable debug logging')
):
    """Cloudflare DynDNS"""
    state.config = config
    state.debug = debug


@app.command()
def init():
    """Create a configuration file interactively"""
    return init_command(config_path=state.config)


@app.command()
def ip():
    """Print your public IP address"""
    return ip_command(config_path=state.config, debug=state.debug)


@app.command("list")
def list_records(
    show_all: bool = typer.Option(False, '--all', '-a', help='Show all record types, not just A and AAAA')
):
    """Display a list of DNS records for your Cloudflare zone"""
    return list_command(config_path=state.config, show_all=show_all, debug=state.debug)


@app.command()
def update(
    name: Optional[List[str]] = typer.Option(
        None, '--name', '-n',
        help='Name of a DNS record to update (repeatable). Defaults to the records in the config file.'
    ),
    ip_address: Optional[str] = typer.Option(
        None, '--ip', '-i',
        help='Update the records to this IP address instead of the current public IP'
    ),
    comment: Optional[str] = typer.Option(
        None, '--comment', '-c',
        help='Comment for updated records (default: "Updated <UTC timestamp>")'
    ),
    continue_on_error: bool = typer.Option(
        False, '--continue-on-error',
        help='Keep updating the remaining records after a failed update'
    ),
):
    """Update your IP address in Cloudflare"""
    return update_command(
        config_path=state.config,
        names=name or None,
        ip=ip_address,
        comment=comment,
        continue_on_error=continue_on_error,
        debug=state.debug,
    )


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
