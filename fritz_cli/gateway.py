"""
Typed router operations on top of the session client.

Every operation is one or two authenticated requests plus a strict decode:
malformed answers raise DecodeError instead of turning into defaults.  The
only tolerated absences are those the router itself treats as optional
(the active/passive device lists and the DSL block of the overview).
"""

from typing import Any, List, Optional

import requests

from .auth.client import SessionClient
from .config import DATA_URL, INETSTAT_URL, REBOOT_URL, RECONNECT_SETTLE_SECONDS
from .exceptions import DecodeError
from .logging_setup import log
from .models import Device, LinkState, Overview


def _decode_json(resp: requests.Response, what: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise DecodeError(f"Malformed JSON in {what} response: {exc}") from exc


def _require_dict(value: Any, path: str) -> dict:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected an object at {path}, got {type(value).__name__}")
    return value


def _opt_text(obj: dict, key: str, path: str) -> str:
    """Return obj[key] as text; absent/null → "", numbers are stringified."""
    value = obj.get(key)
    if value is None:
        return ""
    if isinstance(value, bool):
        raise DecodeError(f"Expected text at {path}.{key}, got a boolean")
    if isinstance(value, (str, int, float)):
        return str(value)
    raise DecodeError(f"Expected text at {path}.{key}, got {type(value).__name__}")


def _req_text(obj: dict, key: str, path: str) -> str:
    if obj.get(key) is None:
        raise DecodeError(f"Missing {path}.{key}")
    return _opt_text(obj, key, path)


def _link_state(data: dict, key: str, optional: bool = False) -> Optional[LinkState]:
    """Decode data.<key>; only an *optional* block may be absent."""
    block = data.get(key)
    if block is None and optional:
        return None
    path = f"data.{key}"
    block = _require_dict(block, path)
    return LinkState(
        state=_req_text(block, "state", path),
        up=_req_text(block, "up", path),
        down=_req_text(block, "down", path),
    )


def _device(entry: Any, path: str, active: bool) -> Device:
    entry = _require_dict(entry, path)
    ip = ""
    ipv4 = entry.get("ipv4")
    if isinstance(ipv4, dict):
        ip = _opt_text(ipv4, "ip", f"{path}.ipv4")
    elif ipv4 is not None:
        ip = _opt_text(entry, "ipv4", path)
    if not ip:
        ip = _opt_text(entry, "ip", path)
    return Device(
        name=_req_text(entry, "name", path),
        ip=ip,
        mac=_opt_text(entry, "mac", path),
        type=_opt_text(entry, "type", path),
        active=active,
    )


def merge_device_lists(data: dict) -> List[Device]:
    """
    Flatten ``data.active`` and ``data.passive`` into one list.

    Active devices come first, then passive ones, each in router order.
    Either list may be absent or null.
    """
    devices: List[Device] = []
    for key, active in (("active", True), ("passive", False)):
        entries = data.get(key)
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise DecodeError(
                f"Expected a list at data.{key}, got {type(entries).__name__}"
            )
        devices.extend(
            _device(entry, f"data.{key}[{i}]", active) for i, entry in enumerate(entries)
        )
    return devices


class ResourceGateway:
    """Overview, device list, reboot and reconnect operations."""

    def __init__(self, client: SessionClient) -> None:
        self.client = client

    def _data_page(self, page: str, **params: str) -> Any:
        resp = self.client.authenticated_request(DATA_URL, {"page": page, **params})
        return _decode_json(resp, f"page={page}")

    def fetch_overview(self) -> Overview:
        body = _require_dict(self._data_page("overview"), "response")
        data = _require_dict(body.get("data"), "data")
        fritzos = _require_dict(data.get("fritzos"), "data.fritzos")

        update = fritzos.get("isUpdateAvail")
        if not isinstance(update, bool):
            raise DecodeError(
                f"Expected a boolean at data.fritzos.isUpdateAvail, got {update!r}"
            )
        return Overview(
            product_name=_req_text(fritzos, "Productname", "data.fritzos"),
            firmware_version=_req_text(fritzos, "nspver", "data.fritzos"),
            update_available=update,
            box_name=_req_text(fritzos, "fb_name", "data.fritzos"),
            internet=_link_state(data, "internet"),
            # cable and fibre boxes have no DSL block
            dsl=_link_state(data, "dsl", optional=True),
        )

    def fetch_devices(self) -> List[Device]:
        body = _require_dict(self._data_page("netDev", xhrId="all"), "response")
        data = _require_dict(body.get("data"), "data")
        devices = merge_device_lists(data)
        log.debug("Router knows %d devices", len(devices))
        return devices

    def reboot(self) -> bool:
        """
        Two-phase reboot.

        Phase 1 asks permission (``page=reboot``); only an explicit
        ``data.reboot == "ok"`` lets phase 2 (``reboot.lua``) fire.
        Returns whether the reboot was accepted.
        """
        body = self._data_page("reboot", reboot="0")
        data = body.get("data") if isinstance(body, dict) else None
        status = data.get("reboot") if isinstance(data, dict) else None
        if status != "ok":
            log.warning("Router refused reboot (data.reboot=%r)", status)
            return False

        self.client.authenticated_request(REBOOT_URL, {"ajax": "1"})
        log.info("Reboot confirmed")
        return True

    def reconnect(self) -> int:
        """
        Drop and re-establish the internet connection.

        Both requests are fire-and-forget.  Returns the number of seconds
        the reconnect may take to be fully effective.
        """
        for action in ("disconnect", "connect"):
            self.client.authenticated_request(
                INETSTAT_URL, {"myXhr": "1", "action": action}, method="GET"
            )
            log.debug("Sent action=%s", action)
        return RECONNECT_SETTLE_SECONDS
