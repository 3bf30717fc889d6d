"""Result records returned by the resource gateway, each renderable as a table row."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .table import Cell, DataclassRow

_MISSING = "-"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


@dataclass(frozen=True)
class LinkState:
    """State of one uplink (internet or DSL) with its current rates."""

    state: str
    up: str = ""
    down: str = ""


@dataclass(frozen=True)
class Overview:
    """Status overview from ``data.lua?page=overview``."""

    product_name: str
    firmware_version: str
    update_available: bool
    box_name: str = ""
    internet: Optional[LinkState] = None
    dsl: Optional[LinkState] = None

    def columns(self) -> List[Tuple[str, Cell]]:
        cells: List[Tuple[str, Cell]] = [
            ("product", self.product_name),
            ("name", self.box_name or _MISSING),
            ("firmware", self.firmware_version),
            ("update", _yes_no(self.update_available)),
        ]
        for label, link in (("internet", self.internet), ("dsl", self.dsl)):
            if link is None:
                cells += [(label, _MISSING), (f"{label}_up", _MISSING),
                          (f"{label}_down", _MISSING)]
            else:
                cells += [(label, link.state), (f"{label}_up", link.up or _MISSING),
                          (f"{label}_down", link.down or _MISSING)]
        return cells


@dataclass(frozen=True)
class Device:
    """A network device known to the router."""

    name: str
    ip: str = ""
    mac: str = ""
    type: str = ""
    active: bool = False

    def columns(self) -> List[Tuple[str, Cell]]:
        return [
            ("name", self.name),
            ("ip", self.ip or _MISSING),
            ("mac", self.mac or _MISSING),
            ("type", self.type or _MISSING),
            ("active", _yes_no(self.active)),
        ]


@dataclass(frozen=True)
class RebootResult(DataclassRow):
    accepted: bool
    message: str


@dataclass(frozen=True)
class ReconnectResult(DataclassRow):
    action: str
    settle_seconds: int
    message: str
