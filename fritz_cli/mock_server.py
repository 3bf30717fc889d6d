"""
Fixture FRITZ!Box for local runs and end-to-end tests.

Speaks just enough of the router's web API for every fritz-cli command:

  GET  /login_sid.lua                     challenge with the sentinel SID
  POST /login_sid.lua                     session; sentinel SID on a wrong response
  POST /data.lua  page=overview|netDev|reboot
  POST /reboot.lua
  GET  /internet/inetstat_monitor.lua     action=connect|disconnect

Usage:
    fritz-mock-server --port 8000 --password secret
    fritz-cli --url http://127.0.0.1:8000 --password secret devices
"""

import argparse
import http.server
import json
import threading
import urllib.parse
from typing import Dict, List, Optional, Tuple

from fritz_cli.auth.password import compute_response
from fritz_cli.config import SENTINEL_SID
from fritz_cli.logging_setup import _setup_logging, log

DEFAULT_CHALLENGE = "59372618"
DEFAULT_SID = "4827051936271849"

OVERVIEW = {
    "data": {
        "fritzos": {
            "Productname": "FRITZ!Box 7590",
            "nspver": "7.57",
            "isUpdateAvail": False,
            "fb_name": "Mock Box",
        },
        "internet": {"state": "connected", "up": "40 Mbit/s", "down": "250 Mbit/s"},
        "dsl": {"state": "ready", "up": "46 Mbit/s", "down": "292 Mbit/s"},
    },
}

NET_DEVICES = {
    "data": {
        "active": [
            {"name": "laptop", "ipv4": {"ip": "192.168.178.20"}, "mac": "AA:BB:CC:00:00:01", "type": "wlan"},
            {"name": "nas", "ipv4": {"ip": "192.168.178.2"}, "mac": "AA:BB:CC:00:00:02", "type": "lan"},
        ],
        "passive": [
            {"name": "printer", "mac": "AA:BB:CC:00:00:03", "type": "lan"},
        ],
    },
}


class MockRouter:
    """State of the fixture device, shared by all request handlers."""

    def __init__(
        self,
        username: str = "",
        password: str = "",
        challenge: str = DEFAULT_CHALLENGE,
        sid: str = DEFAULT_SID,
        reboot_status: str = "ok",
    ) -> None:
        self.username = username
        self.password = password
        self.challenge = challenge
        self.sid = sid
        self.reboot_status = reboot_status
        self.logged_in = False
        self.requests: List[Tuple[str, str, Dict[str, str]]] = []
        self._lock = threading.Lock()

    def record(self, method: str, path: str, params: Dict[str, str]) -> None:
        with self._lock:
            self.requests.append((method, path, params))

    def session_xml(self, sid: str, block_time: int = 0) -> bytes:
        return (
            '<?xml version="1.0" encoding="utf-8"?>'
            f"<SessionInfo><SID>{sid}</SID><Challenge>{self.challenge}</Challenge>"
            f"<BlockTime>{block_time}</BlockTime></SessionInfo>"
        ).encode("utf-8")

    def login(self, params: Dict[str, str]) -> bytes:
        expected = compute_response(self.challenge, self.password)
        if params.get("username", "") == self.username and params.get("response") == expected:
            self.logged_in = True
            return self.session_xml(self.sid)
        return self.session_xml(SENTINEL_SID)

    def authorised(self, params: Dict[str, str]) -> bool:
        return self.logged_in and params.get("sid") == self.sid

    def data_page(self, params: Dict[str, str]) -> Optional[dict]:
        page = params.get("page")
        if page == "overview":
            return OVERVIEW
        if page == "netDev":
            return NET_DEVICES
        if page == "reboot":
            return {"data": {"reboot": self.reboot_status}}
        return None


class FritzHandler(http.server.BaseHTTPRequestHandler):
    """HTTP request handler emulating the router web API."""

    router: MockRouter  # set on the per-server subclass

    def log_message(self, fmt: str, *args) -> None:
        log.debug("mock: " + fmt, *args)

    def _reply(self, status: int, body: bytes, content_type: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _json(self, data) -> None:
        self._reply(200, json.dumps(data).encode("utf-8"), "application/json")

    def _forbidden(self) -> None:
        self._reply(403, b"", "text/plain")

    def do_GET(self) -> None:  # noqa: N802
        parsed = urllib.parse.urlparse(self.path)
        params = dict(urllib.parse.parse_qsl(parsed.query))
        self.router.record("GET", parsed.path, params)

        if parsed.path == "/login_sid.lua":
            self._reply(200, self.router.session_xml(SENTINEL_SID), "text/xml")
        elif parsed.path == "/internet/inetstat_monitor.lua":
            if not self.router.authorised(params):
                self._forbidden()
                return
            self._json({"action": params.get("action", "")})
        else:
            self._reply(404, b"", "text/plain")

    def do_POST(self) -> None:  # noqa: N802
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8") if length > 0 else ""
        params = dict(urllib.parse.parse_qsl(body))
        path = urllib.parse.urlparse(self.path).path
        self.router.record("POST", path, params)

        if path == "/login_sid.lua":
            self._reply(200, self.router.login(params), "text/xml")
        elif path == "/data.lua":
            if not self.router.authorised(params):
                self._forbidden()
                return
            page = self.router.data_page(params)
            if page is None:
                self._reply(404, b"", "text/plain")
                return
            self._json(page)
        elif path == "/reboot.lua":
            if not self.router.authorised(params):
                self._forbidden()
                return
            self._reply(200, b"", "text/html")
        else:
            self._reply(404, b"", "text/plain")


def make_server(
    router: MockRouter, host: str = "127.0.0.1", port: int = 0
) -> http.server.ThreadingHTTPServer:
    """Create (but do not start) a server for *router*; port 0 picks a free port."""
    handler = type("BoundFritzHandler", (FritzHandler,), {"router": router})
    return http.server.ThreadingHTTPServer((host, port), handler)


def main() -> None:
    parser = argparse.ArgumentParser(description="Fixture FRITZ!Box web API server.")
    parser.add_argument("--listen", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument("--user", default="", help="Accepted username")
    parser.add_argument("--password", default="", help="Accepted password")
    parser.add_argument(
        "--refuse-reboot", action="store_true",
        help="Answer the reboot request with something other than 'ok'",
    )
    parser.add_argument("--debug", action="store_true", help="Log every request")
    args = parser.parse_args()

    _setup_logging(debug=args.debug)
    router = MockRouter(
        username=args.user,
        password=args.password,
        reboot_status="busy" if args.refuse_reboot else "ok",
    )
    server = make_server(router, args.listen, args.port)
    log.info("Mock FRITZ!Box listening on http://%s:%d", *server.server_address[:2])
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log.info("Shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
