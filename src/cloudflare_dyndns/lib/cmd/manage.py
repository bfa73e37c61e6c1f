"""
List command implementation for Cloudflare DynDNS
"""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import ConfigError
from ..dns.base import DNSError
from ..dns.cloudflare import CloudflareClient
from .context import load_context, print_dns_error

console = Console()

ADDRESS_RECORD_TYPES = ("A", "AAAA")


def list_command(
    config_path: Optional[Path] = None,
    show_all: bool = False,
    debug: bool = False
) -> None:
    """
    List DNS records of the configured zone

    Only A and AAAA records are shown unless show_all is set, so the record
    to keep updated is easy to find.
    """
    try:
        config, logger = load_context(config_path, debug)
    except ConfigError as e:
        console.print(f"[bold red]Configuration error: {escape(str(e))}")
        raise typer.Exit(code=1)

    client = CloudflareClient.from_config(config, logger=logger.getChild("cloudflare"))

    try:
        records = client.list_records()
        logger.info(f"Found {len(records)} total DNS records in zone {config.zone_id}")
    except DNSError as e:
        print_dns_error(console, logger, "Failed to get DNS records", e)
        raise typer.Exit(code=1)

    table = Table(title=f"DNS Records for zone {config.zone_id}")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("IP", style="green")
    table.add_column("Comment", style="dim")

    shown = 0
    for record in records:
        if record.type not in ADDRESS_RECORD_TYPES and not show_all:
            continue
        table.add_row(
            escape(record.name),
            record.type,
            escape(record.address),
            escape(record.comment) if record.comment else "-",
        )
        shown += 1

    if not shown:
        console.print("[yellow]No matching DNS records found. Use --all to see all records.")
        return

    console.print(table)
