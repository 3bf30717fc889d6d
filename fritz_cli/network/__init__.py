"""
Network operations module for HTTP client setup and request handling.
"""

from fritz_cli.network.client import build_session, endpoint_url

__all__ = ["build_session", "endpoint_url"]
