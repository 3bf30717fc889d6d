"""Authentication submodule – challenge response, session model, session client."""

from fritz_cli.auth.client import ClientState, SessionClient
from fritz_cli.auth.password import compute_response
from fritz_cli.auth.session import Session, parse_session_info

__all__ = [
    "ClientState",
    "SessionClient",
    "compute_response",
    "Session",
    "parse_session_info",
]
