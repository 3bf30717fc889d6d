"""Challenge-response encoding for the FRITZ!Box login."""

import hashlib

# Replacement for UTF-16 code units outside the Latin-1 range
_FOLD_UNIT = 0x2E


def _utf16le_latin1_folded(text: str) -> bytes:
    """
    Encode *text* as UTF-16LE, replacing every code unit above 0xFF with '.'.

    Characters outside the BMP produce a surrogate pair; both halves are
    above 0xFF and each folds to '.'.
    """
    raw = text.encode("utf-16-le", errors="surrogatepass")
    out = bytearray()
    for i in range(0, len(raw), 2):
        unit = raw[i] | (raw[i + 1] << 8)
        if unit > 0xFF:
            unit = _FOLD_UNIT
        out += unit.to_bytes(2, "little")
    return bytes(out)


def compute_response(challenge: str, password: str) -> str:
    """
    Replicate the router's MD5 challenge response from login_sid.lua:

      1. "<challenge>-<password>" as UTF-16LE code units
      2. every code unit > 255 replaced by 0x2E ('.')
      3. MD5 over those bytes, rendered as 32 lowercase hex digits
      4. "<challenge>-<md5hex>"

    >>> compute_response("1234567z", "äbc")
    '1234567z-9e224a41eeefa284df7bb0f26c2913e2'
    """
    data = _utf16le_latin1_folded(f"{challenge}-{password}")
    return f"{challenge}-{hashlib.md5(data).hexdigest()}"
