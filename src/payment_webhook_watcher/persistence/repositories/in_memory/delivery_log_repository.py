# -*- coding: utf-8 -*-
"""In-memory delivery log repository (keyed by (namespace, key))."""

from __future__ import annotations

from payment_webhook_watcher.models.notification_record import NotificationRecord
from payment_webhook_watcher.persistence.repositories.interfaces.delivery_log_repository import (
    IDeliveryLogRepository,
)


def _key(namespace: str, key: str) -> tuple[str, str]:
    """Normalize key for storage."""
    return (namespace.strip(), key.strip())


class InMemoryDeliveryLogRepository(IDeliveryLogRepository):
    """In-memory implementation of IDeliveryLogRepository. Not durable across restarts."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[tuple[str, str], NotificationRecord] = {}

    async def exists(self, namespace: str, key: str) -> bool:
        """Return True if (namespace, key) has been recorded."""
        return _key(namespace, key) in self._store

    async def record(self, namespace: str, key: str, record: NotificationRecord) -> None:
        """Store the record (last write wins)."""
        self._store[_key(namespace, key)] = record

    async def get(self, namespace: str, key: str) -> NotificationRecord | None:
        return self._store.get(_key(namespace, key))

    def __len__(self) -> int:
        return len(self._store)
