"""In-memory repository implementations."""

from payment_webhook_watcher.persistence.repositories.in_memory.delivery_log_repository import (
    InMemoryDeliveryLogRepository,
)

__all__ = ["InMemoryDeliveryLogRepository"]
