"""
Keep Cloudflare DNS records pointed at your current public IP address
"""

__version__ = "1.0.0"
