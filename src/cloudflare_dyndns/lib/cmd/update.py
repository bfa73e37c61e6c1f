"""
Update command implementation for Cloudflare DynDNS
"""
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import ConfigError
from ..dns.base import DNSError
from ..dns.cloudflare import CloudflareClient
from ..gateway import GatewayError, check_home_gateway
from ..ip.address import ResolvedIP
from ..ip.ipify import IpifyClient, IPResolutionError
from ..reconcile import (
    FailurePolicy,
    OutcomeStatus,
    ReconcileAborted,
    ReconcileReport,
    Reconciler,
)
from .context import load_context, print_dns_error

console = Console()


def update_command(
    config_path: Optional[Path] = None,
    names: Optional[List[str]] = None,
    ip: Optional[str] = None,
    comment: Optional[str] = None,
    continue_on_error: bool = False,
    debug: bool = False,
) -> None:
    """
    Update DNS records to the current public IP address

    Records are taken from the configuration unless names are given; the
    public IP is discovered unless ip is given. Exits with code 1 when the
    IP cannot be resolved, the records cannot be listed or an update fails.
    """
    try:
        config, logger = load_context(config_path, debug)
    except ConfigError as e:
        console.print(f"[bold red]Configuration error: {escape(str(e))}")
        raise typer.Exit(code=1)

    # Only update from the home network, if one is configured
    if config.home_gateway:
        try:
            check = check_home_gateway(config.home_gateway)
        except GatewayError as e:
            logger.error(f"Failed to discover gateway: {e}")
            console.print(f"[bold red]Error: {escape(str(e))}")
            raise typer.Exit(code=1)
        if not check.matches:
            logger.info(f"current gateway {check.current} does not match home gateway {check.expected}")
            console.print(
                f"[yellow]Warning: Your current gateway ({check.current}) does not match "
                f"your home gateway ({check.expected}). Exiting."
            )
            raise typer.Exit(code=0)

    if ip:
        resolved = ResolvedIP.from_address(ip)
    else:
        try:
            resolved = IpifyClient.from_config(config, logger=logger.getChild("ipify")).resolve()
        except IPResolutionError as e:
            message = f"Failed to retrieve public IP: {e}"
            logger.error(message)
            console.print(f"[bold red]{escape(message)}")
            raise typer.Exit(code=1)

    reconciler = Reconciler(
        CloudflareClient.from_config(config, logger=logger.getChild("cloudflare")),
        comment=comment,
        failure_policy=FailurePolicy.CONTINUE if continue_on_error else FailurePolicy.ABORT,
        logger=logger.getChild("reconcile"),
    )

    try:
        report = reconciler.reconcile(names or config.update_records, resolved)
    except ReconcileAborted as e:
        print_report(e.report, logger)
        raise typer.Exit(code=1)
    except DNSError as e:
        print_dns_error(console, logger, "Failed to get DNS records", e)
        raise typer.Exit(code=1)

    print_report(report, logger)
    if not report.ok:
        raise typer.Exit(code=1)


def print_report(report: ReconcileReport, logger: logging.Logger) -> None:
    """Print one line per reconciled record name"""
    for outcome in report.outcomes:
        name = escape(outcome.name)
        if outcome.status == OutcomeStatus.UPDATED:
            console.print(
                f'Updating IP address from "{escape(outcome.previous_address or "")}" '
                f'to "{escape(report.address.address)}".'
            )
            console.print(f'[green]IP address for "{name}" updated.')
        elif outcome.status == OutcomeStatus.UP_TO_DATE:
            console.print(f'IP address for "{name}" is already up to date.')
        elif outcome.status == OutcomeStatus.NOT_FOUND:
            console.print(f'[yellow]Could not find DNS record with name "{name}".')
        else:
            print_dns_error(console, logger, f"Failed to update DNS record {outcome.name}", outcome.error)
