"""Interface shared by chain data sources."""

from __future__ import annotations

from typing import Protocol

from payment_webhook_watcher.models.transaction import Transaction


class ITransactionSource(Protocol):
    """Read-only access to an address's recent transactions."""

    async def get_transactions(self, address: str, *, limit: int) -> list[Transaction]:
        """Return up to `limit` recent transactions, newest first, in the source's order.

        Raises:
            ChainAPIError: If the read fails (transport, status or API-level error).
        """
        ...
