# -*- coding: utf-8 -*-
"""Transaction: one chain transaction normalised from a data source record.

Each chain surfaces message payloads differently: TON attaches text to the
inbound message and each outbound message leg, Ethereum carries hex-encoded
bytes in the transaction input. Both are normalised into ``payloads`` plus a
``payload_encoding`` so matching does not care which source produced them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Literal

PayloadEncoding = Literal["text", "hex"]

WEI_PER_ETHER = Decimal(10) ** 18


def format_ether(wei: Any) -> str:
    """Format a wei amount as an ether decimal string (always with a fractional part).

    Examples: "1500000000000000000" -> "1.5", "0" -> "0.0".
    """
    amount = Decimal(str(wei)) / WEI_PER_ETHER
    text = format(amount.normalize(), "f")
    if "." not in text:
        text += ".0"
    return text


def _parse_timestamp(raw: Any, field_name: str) -> int:
    """Unix seconds from a source field; missing or non-positive values are rejected."""
    if raw is None or raw == "":
        raise ValueError(f"transaction without {field_name}")
    timestamp = int(raw)
    if timestamp <= 0:
        raise ValueError(f"transaction with non-positive {field_name}: {raw!r}")
    return timestamp


@dataclass(frozen=True, slots=True)
class Transaction:
    """A fetched transaction. Immutable; owned by one poll cycle."""

    hash: str
    timestamp: int
    """Unix timestamp (seconds) from the chain."""

    sender: str | None = None
    recipient: str | None = None
    is_inbound: bool | None = None
    """True/False relative to the watched address; None if the source does not surface direction."""

    payloads: tuple[str, ...] = field(default_factory=tuple)
    """Raw message payloads in source order (inbound message first)."""
    payload_encoding: PayloadEncoding = "text"
    value: str | None = None
    """Transferred amount as a decimal string in the chain's main unit, if reported."""

    @classmethod
    def from_toncenter(cls, response: dict[str, Any]) -> Transaction:
        """Build from a toncenter v2 getTransactions item.

        Raises:
            ValueError: If the item has no transaction hash or no utime.
        """
        tx_id = response.get("transaction_id") or {}
        tx_hash = tx_id.get("hash") if isinstance(tx_id, dict) else None
        if not isinstance(tx_hash, str) or not tx_hash:
            raise ValueError("toncenter transaction without transaction_id.hash")

        in_msg = response.get("in_msg")
        if not isinstance(in_msg, dict):
            in_msg = {}
        payloads: list[str] = []
        in_text = in_msg.get("message")
        if isinstance(in_text, str) and in_text:
            payloads.append(in_text)
        for out_msg in response.get("out_msgs") or []:
            if not isinstance(out_msg, dict):
                continue
            text = out_msg.get("message")
            if isinstance(text, str) and text:
                payloads.append(text)

        return cls(
            hash=tx_hash,
            timestamp=_parse_timestamp(response.get("utime"), "utime"),
            sender=in_msg.get("source") or None,
            recipient=in_msg.get("destination") or None,
            is_inbound=None,
            payloads=tuple(payloads),
            payload_encoding="text",
        )

    @classmethod
    def from_etherscan(cls, response: dict[str, Any], *, watched_address: str) -> Transaction:
        """Build from an Etherscan txlist item.

        Direction is derived from ``to`` compared case-insensitively with the
        watched address. An input of "0x" (plain transfer) yields no payload.

        Raises:
            ValueError: If the item has no hash or a malformed timestamp/value.
        """
        tx_hash = response.get("hash")
        if not isinstance(tx_hash, str) or not tx_hash:
            raise ValueError("etherscan transaction without hash")

        recipient = response.get("to") or None
        input_data = response.get("input") or ""
        payloads = (input_data,) if input_data not in ("", "0x") else ()
        raw_value = response.get("value")

        return cls(
            hash=tx_hash,
            timestamp=_parse_timestamp(response.get("timeStamp"), "timeStamp"),
            sender=response.get("from") or None,
            recipient=recipient,
            is_inbound=(
                recipient is not None
                and recipient.lower() == watched_address.strip().lower()
            ),
            payloads=payloads,
            payload_encoding="hex",
            value=format_ether(raw_value) if raw_value not in (None, "") else None,
        )
