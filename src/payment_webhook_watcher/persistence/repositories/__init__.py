# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, filesystem)."""

from payment_webhook_watcher.persistence.repositories.interfaces import (
    IDeliveryLogRepository,
)
from payment_webhook_watcher.persistence.repositories.in_memory import (
    InMemoryDeliveryLogRepository,
)
from payment_webhook_watcher.persistence.repositories.filesystem import (
    FileDeliveryLogRepository,
)

__all__ = [
    "IDeliveryLogRepository",
    "InMemoryDeliveryLogRepository",
    "FileDeliveryLogRepository",
]
