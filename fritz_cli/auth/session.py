"""
Session model and decoding of the login_sid.lua XML answer.

The router answers both the challenge probe (GET) and the login (POST)
with the same document::

    <SessionInfo>
      <SID>0000000000000000</SID>
      <Challenge>1234567z</Challenge>
      <BlockTime>0</BlockTime>
      ...
    </SessionInfo>
"""

from dataclasses import dataclass

from lxml import etree

from ..config import SENTINEL_SID
from ..exceptions import DecodeError

# No DTD/entity expansion or network access while parsing router output
_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


@dataclass(frozen=True)
class Session:
    """Challenge / session state as reported by the router."""

    sid: str = SENTINEL_SID
    challenge: str = ""
    block_time: int = 0

    @property
    def is_valid(self) -> bool:
        """True for any sid other than the all-zero "no session" value."""
        return self.sid != SENTINEL_SID


def _child_text(root: etree._Element, tag: str) -> "str | None":
    node = root.find(tag)
    if node is None:
        return None
    return (node.text or "").strip()


def parse_session_info(body: bytes) -> Session:
    """
    Decode a login_sid.lua response body into a Session.

    Raises DecodeError when the body is not XML or lacks the SID or
    Challenge tag, or when BlockTime is not an integer.  A missing
    BlockTime counts as 0.
    """
    try:
        root = etree.fromstring(body, parser=_XML_PARSER)
    except etree.XMLSyntaxError as exc:
        raise DecodeError(f"Malformed session XML: {exc}") from exc

    sid = _child_text(root, "SID")
    challenge = _child_text(root, "Challenge")
    if sid is None or challenge is None:
        raise DecodeError(
            f"Session XML lacks SID/Challenge (root element <{root.tag}>)"
        )

    block_raw = _child_text(root, "BlockTime")
    try:
        block_time = int(block_raw) if block_raw else 0
    except ValueError as exc:
        raise DecodeError(f"Invalid BlockTime {block_raw!r}") from exc

    return Session(sid=sid, challenge=challenge, block_time=block_time)
