"""Persistence layer (repositories, etc.)."""

from payment_webhook_watcher.persistence.repositories import (
    FileDeliveryLogRepository,
    IDeliveryLogRepository,
    InMemoryDeliveryLogRepository,
)

__all__ = [
    "IDeliveryLogRepository",
    "InMemoryDeliveryLogRepository",
    "FileDeliveryLogRepository",
]
