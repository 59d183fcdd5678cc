"""Deduplication key for delivered transactions."""

from __future__ import annotations

import string

_SAFE_CHARS = frozenset(string.ascii_letters + string.digits + "_-")


def dedup_key(tx_hash: str) -> str:
    """Return a filesystem-safe key for a transaction hash.

    Letters, digits, "_" and "-" pass through; every other character (including
    "%" itself, "/", "+", "=" and ".") becomes "%XX" per UTF-8 byte. Because the
    escape character is itself escaped, distinct hashes never share a key.

    Raises:
        ValueError: If tx_hash is empty.
    """
    if not tx_hash:
        raise ValueError("tx_hash must be non-empty")
    parts: list[str] = []
    for ch in tx_hash:
        if ch in _SAFE_CHARS:
            parts.append(ch)
        else:
            parts.extend(f"%{b:02X}" for b in ch.encode("utf-8"))
    return "".join(parts)
