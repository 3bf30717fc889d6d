"""
HTTP client configuration for router communication.

Provides the requests.Session used as transport by the session client.
"""

import requests
from requests.adapters import HTTPAdapter


def build_session() -> requests.Session:
    """
    Return a requests.Session with keep-alive pre-configured.

    The adapter never retries: a failed request surfaces to the caller,
    which decides whether to log in again.

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": "fritz-cli",
        "Accept": "application/json, text/xml, */*",
        "Connection": "keep-alive",
    })
    return session


def endpoint_url(base_url: str, path: str) -> str:
    """
    Join the router base URL and an endpoint path.

    Args:
        base_url: Router base URL without trailing slash (e.g. 'http://fritz.box')
        path: Endpoint path, with or without leading slash

    Returns:
        Absolute URL string (e.g., 'http://fritz.box/data.lua')
    """
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
