"""Payload decoding: raw transaction message data to text."""

from __future__ import annotations

import binascii

from payment_webhook_watcher.exceptions import PayloadDecodeError
from payment_webhook_watcher.models.transaction import PayloadEncoding


def decode_payload(raw: str, encoding: PayloadEncoding) -> str:
    """Return the payload as text.

    ``hex`` payloads (optional 0x prefix) must decode to valid UTF-8.

    Raises:
        PayloadDecodeError: If the hex is malformed or the bytes are not UTF-8.
    """
    if encoding == "text":
        return raw
    digits = raw[2:] if raw[:2].lower() == "0x" else raw
    try:
        return binascii.unhexlify(digits).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise PayloadDecodeError(f"payload is not hex-encoded UTF-8: {e}") from e
