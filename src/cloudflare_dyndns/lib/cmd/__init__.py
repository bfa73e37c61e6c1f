"""
Command implementations for Cloudflare DynDNS
"""

# Command implementations
from .init import init_command
from .ip import ip_command
from .manage import list_command
from .update import update_command

__all__ = [
    'init_command',
    'ip_command',
    'list_command',
    'update_command',
]
