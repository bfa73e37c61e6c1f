"""
DNS record types and DNS provider errors
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class DNSRecord:
    """DNS record data"""
    id: str
    name: str
    type: str
    address: str
    proxied: bool = False
    ttl: int = 1
    comment: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DNSRecord":
        """
        Build a record from its wire representation

        Args:
            data: Record object as returned by the provider

        Returns:
            DNSRecord object

        Raises:
            KeyError: If one of id, name or type is missing
        """
        return cls(
            id=data['id'],
            name=data['name'],
            type=data['type'],
            address=data.get('content') or "",
            proxied=bool(data.get('proxied') or False),
            ttl=int(data.get('ttl') or 1),
            comment=data.get('comment') or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation used as the update request body"""
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'content': self.address,
            'proxied': self.proxied,
            'ttl': self.ttl,
            'comment': self.comment,
        }


@dataclass(frozen=True)
class ResponseError:
    """Error entry from a provider response envelope"""
    code: int
    message: str

    def __str__(self) -> str:
        return f"{self.message} (code: {self.code})"


class DNSError(Exception):
    """Base exception for DNS operations"""
    pass


class TransportError(DNSError):
    """The provider could not be reached (connection, DNS lookup, timeout)"""
    pass


class DecodeError(DNSError):
    """The provider answered with something that is not a response envelope"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class APIError(DNSError):
    """The provider rejected the request (``success`` is false)"""

    def __init__(self, message: str, errors: Optional[List[ResponseError]] = None,
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.errors = list(errors or [])
        self.status_code = status_code

    def __str__(self) -> str:
        message = super().__str__()
        if not self.errors:
            return message
        return f"{message}: " + "; ".join(str(e) for e in self.errors)
