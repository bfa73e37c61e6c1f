"""
Resolved public IP address
"""
from dataclasses import dataclass


def is_ipv4_address(address: str) -> bool:
    """
    Classify an address string as IPv4

    This is a substring heuristic rather than address parsing: anything
    containing a dot counts as IPv4, everything else as IPv6. Swap this
    function for ``ipaddress.ip_address`` based parsing to get strict
    address-family detection.
    """
    return "." in address


@dataclass(frozen=True)
class ResolvedIP:
    """Public IP address together with its address family"""
    address: str
    is_ipv4: bool

    @classmethod
    def from_address(cls, address: str) -> "ResolvedIP":
        address = address.strip()
        return cls(address=address, is_ipv4=is_ipv4_address(address))

    @property
    def record_type(self) -> str:
        """DNS record type that carries this address"""
        return "A" if self.is_ipv4 else "AAAA"

    def __str__(self) -> str:
        return self.address
