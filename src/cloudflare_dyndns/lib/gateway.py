"""
Default gateway discovery for the home network check
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict

import netifaces


class GatewayError(Exception):
    """The default gateway could not be determined"""
    pass


@dataclass(frozen=True)
class GatewayCheck:
    """Result of comparing the current gateway with the home gateway"""
    matches: bool
    current: str
    expected: str


def default_gateway(gateways: Dict[Any, Any]) -> str:
    """
    Pick the default IPv4 gateway out of a ``netifaces.gateways()`` mapping

    Args:
        gateways: Gateway table keyed by 'default' and address family

    Returns:
        Gateway IPv4 address in dotted-quad form

    Raises:
        GatewayError: If there is no default IPv4 route
    """
    entry = (gateways.get('default') or {}).get(netifaces.AF_INET)
    if not entry:
        raise GatewayError("No default gateway found")
    return entry[0]


def discover_gateway(gateways: Callable[[], Dict[Any, Any]] = netifaces.gateways) -> str:
    """Discover the default IPv4 gateway of this host"""
    try:
        table = gateways()
    except (OSError, ValueError) as e:
        raise GatewayError(f"Unable to read the routing table: {str(e)}")
    return default_gateway(table)


def check_home_gateway(home_gateway: str,
                       discover: Callable[[], str] = discover_gateway) -> GatewayCheck:
    """Compare the current default gateway with the configured home gateway"""
    current = discover()
    return GatewayCheck(matches=current == home_gateway, current=current, expected=home_gateway)
