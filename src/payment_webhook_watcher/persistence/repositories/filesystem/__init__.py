"""Filesystem-backed repository implementations."""

from payment_webhook_watcher.persistence.repositories.filesystem.delivery_log_repository import (
    FileDeliveryLogRepository,
)

__all__ = ["FileDeliveryLogRepository"]
