# -*- coding: utf-8 -*-
"""Domain models."""

from payment_webhook_watcher.models.cycle_report import CycleReport
from payment_webhook_watcher.models.delivery_outcome import DeliveryOutcome
from payment_webhook_watcher.models.match_result import MatchResult
from payment_webhook_watcher.models.notification_record import NotificationRecord, iso_utc
from payment_webhook_watcher.models.transaction import (
    PayloadEncoding,
    Transaction,
    format_ether,
)

__all__ = [
    "CycleReport",
    "DeliveryOutcome",
    "MatchResult",
    "NotificationRecord",
    "PayloadEncoding",
    "Transaction",
    "format_ether",
    "iso_utc",
]
