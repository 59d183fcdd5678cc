"""Validation helpers for watched addresses and webhook URIs."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlparse

_HEX_ADDRESS = re.compile(r"0x[0-9a-fA-F]{40}")
# User-friendly form (base64 / base64url, 36 bytes) or raw "<workchain>:<64 hex>"
_TON_FRIENDLY = re.compile(r"[A-Za-z0-9_\-+/]{48}")
_TON_RAW = re.compile(r"-?\d+:[0-9a-fA-F]{64}")


def is_hex_address(addr: Any) -> bool:
    """Return True if addr is a 0x-prefixed 20-byte hex address (42 chars)."""
    return isinstance(addr, str) and _HEX_ADDRESS.fullmatch(addr.strip()) is not None


def is_ton_address(addr: Any) -> bool:
    """Return True if addr looks like a TON address (friendly or raw form)."""
    if not isinstance(addr, str):
        return False
    s = addr.strip()
    return _TON_FRIENDLY.fullmatch(s) is not None or _TON_RAW.fullmatch(s) is not None


def is_http_url(x: Any) -> bool:
    """Return True if x is an absolute http(s) URL with a host."""
    if not isinstance(x, str):
        return False
    parsed = urlparse(x.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def mask_address(addr: str | None) -> str:
    """Shorten an address for logs: "EQBvW8...ggGG", "0x2d27...7706"; "***" if too short."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"
