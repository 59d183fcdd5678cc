# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, filesystem/."""

from payment_webhook_watcher.persistence.repositories.interfaces.delivery_log_repository import (
    IDeliveryLogRepository,
)

__all__ = ["IDeliveryLogRepository"]
