"""
Cloudflare DNS records API
"""
from .base import DNSRecord, ResponseError, DNSError, TransportError, DecodeError, APIError
from .envelope import ProviderResponse, decode_envelope
from .cloudflare import CloudflareClient

__all__ = [
    "DNSRecord",
    "ResponseError",
    "DNSError",
    "TransportError",
    "DecodeError",
    "APIError",
    "ProviderResponse",
    "decode_envelope",
    "CloudflareClient",
]
