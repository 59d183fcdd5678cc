# -*- coding: utf-8 -*-
"""NotificationRecord: the webhook body and the durable proof of delivery."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from payment_webhook_watcher.models.transaction import Transaction


def iso_utc(timestamp: int) -> str:
    """Unix seconds to ISO-8601 UTC with milliseconds and a Z suffix (2024-01-02T03:04:05.000Z)."""
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class NotificationRecord:
    """One delivered notification. Written once, never mutated."""

    hash: str
    time: str
    """ISO-8601 UTC time of the transaction on chain."""
    order_id: str | None = None
    value: str | None = None

    @classmethod
    def from_transaction(cls, tx: Transaction, order_id: str | None) -> NotificationRecord:
        return cls(
            hash=tx.hash,
            time=iso_utc(tx.timestamp),
            order_id=order_id,
            value=tx.value,
        )

    def to_payload(self) -> dict[str, Any]:
        """Webhook JSON body; ``value`` is omitted when the chain reports none."""
        payload: dict[str, Any] = {
            "hash": self.hash,
            "time": self.time,
            "orderId": self.order_id,
        }
        if self.value is not None:
            payload["value"] = self.value
        return payload

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> NotificationRecord:
        """Build from a stored or received webhook body."""
        return cls(
            hash=data["hash"],
            time=data["time"],
            order_id=data.get("orderId"),
            value=data.get("value"),
        )
