"""
Utility functions for Cloudflare DynDNS
"""
from datetime import datetime, timezone
from typing import Optional

DEFAULT_COMMENT_PREFIX = "Updated"


def join_url(base: str, path: str) -> str:
    """
    Join an API base URL and an endpoint path

    Args:
        base: Base URL, with or without a trailing slash
        path: Endpoint path, with or without a leading slash

    Returns:
        The joined URL with exactly one slash between the parts

    Raises:
        ValueError: If the base URL has no scheme or host
    """
    if "://" not in base or not base.split("://", 1)[1].strip("/"):
        raise ValueError(f"unable to parse base url: {base!r}")
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def default_comment(now: Optional[datetime] = None) -> str:
    """Record comment used when the caller does not supply one"""
    now = now or datetime.now(timezone.utc)
    return f"{DEFAULT_COMMENT_PREFIX} {now.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S')}"


def mask_token(token: str) -> str:
    """Mask an API token for display"""
    if not token:
        return "Not provided"
    return f"{token[:4]}...{token[-4:] if len(token) > 8 else '****'}"
