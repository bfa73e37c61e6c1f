"""
Public IP discovery
"""
from .address import ResolvedIP, is_ipv4_address
from .ipify import IpifyClient, IPResolutionError

__all__ = [
    "ResolvedIP",
    "is_ipv4_address",
    "IpifyClient",
    "IPResolutionError",
]
