"""
fritz_cli
=========
Console client for the AVM FRITZ!Box web API: challenge-response login,
status overview, device listing, reboot and reconnect, all printed as
aligned tables.

Package structure
-----------------
fritz_cli/
├── __init__.py        – package init and public API
├── config.py          – endpoint constants, Credentials, config file handling
├── exceptions.py      – FritzError hierarchy
├── logging_setup.py   – colorlog-backed logger
├── auth/              – sub-package: login protocol
│   ├── password.py    – challenge response (UTF-16LE + MD5)
│   ├── session.py     – Session model, login_sid.lua XML decoding
│   └── client.py      – SessionClient (login, authenticated_request)
├── network/           – sub-package: requests.Session factory
├── gateway.py         – ResourceGateway (overview, devices, reboot, reconnect)
├── models.py          – result records rendered as table rows
├── table.py           – generic table renderer
├── cli.py             – argparse CLI (``python -m fritz_cli``)
└── mock_server.py     – fixture router for local runs and tests

Quick start
-----------
    from fritz_cli import Credentials, ResourceGateway, SessionClient, render

    creds = Credentials("http://fritz.box", "admin", "your_password")
    with SessionClient(creds) as client:
        client.login()
        print(render(ResourceGateway(client).fetch_devices()), end="")
"""

from .config import Credentials
from .auth import SessionClient, Session, compute_response
from .exceptions import (
    AuthError,
    DecodeError,
    FritzError,
    LoginRejectedError,
    NotLoggedInError,
    TransportError,
)
from .gateway import ResourceGateway
from .table import render

__version__ = "0.1.0"

__all__ = [
    "Credentials",
    "SessionClient",
    "Session",
    "compute_response",
    "ResourceGateway",
    "render",
    "FritzError",
    "TransportError",
    "DecodeError",
    "AuthError",
    "LoginRejectedError",
    "NotLoggedInError",
]
