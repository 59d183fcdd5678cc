"""Delivery outcome for one tracked transaction in one poll cycle."""

from __future__ import annotations

from enum import Enum


class DeliveryOutcome(str, Enum):
    """Result of WebhookDeliveryService.deliver()."""

    DELIVERED = "DELIVERED"
    SKIPPED = "SKIPPED"
    """Already recorded as delivered; no request was sent."""
    FAILED = "FAILED"
    """Receiver did not accept the webhook; nothing recorded, retried next cycle."""
    DELIVERED_UNRECORDED = "DELIVERED_UNRECORDED"
    """Receiver accepted the webhook but the delivery record could not be written."""
