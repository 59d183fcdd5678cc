"""Abstract interface for delivery record storage (in-memory, filesystem, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from payment_webhook_watcher.models.notification_record import NotificationRecord


class IDeliveryLogRepository(ABC):
    """Interface for persisting NotificationRecord (proof that a webhook was accepted).

    Keys are partitioned by namespace (the watched address) so several watched
    addresses can share one store.
    """

    @abstractmethod
    async def exists(self, namespace: str, key: str) -> bool:
        """Return True if a record for (namespace, key) was written by any past run."""
        ...

    @abstractmethod
    async def record(self, namespace: str, key: str, record: NotificationRecord) -> None:
        """Persist a delivery record. Idempotent: re-recording a key overwrites it.

        Raises:
            RecordWriteFailedError: If the record could not be persisted.
        """
        ...

    @abstractmethod
    async def get(self, namespace: str, key: str) -> NotificationRecord | None:
        """Return the stored record, or None if (namespace, key) was never recorded."""
        ...
