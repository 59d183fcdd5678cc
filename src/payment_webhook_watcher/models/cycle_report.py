"""CycleReport: counters for one poll cycle."""

from __future__ import annotations

from dataclasses import dataclass

from payment_webhook_watcher.models.delivery_outcome import DeliveryOutcome


@dataclass(slots=True)
class CycleReport:
    """Mutable tally filled in while a cycle runs."""

    address: str
    fetched: int = 0
    tracked: int = 0
    delivered: int = 0
    skipped: int = 0
    failed: int = 0
    unrecorded: int = 0
    errors: int = 0
    """Transactions whose match/deliver raised unexpectedly."""
    aborted: bool = False
    """True when the fetch was exhausted and no transactions were processed."""

    def count(self, outcome: DeliveryOutcome) -> None:
        if outcome is DeliveryOutcome.DELIVERED:
            self.delivered += 1
        elif outcome is DeliveryOutcome.SKIPPED:
            self.skipped += 1
        elif outcome is DeliveryOutcome.FAILED:
            self.failed += 1
        elif outcome is DeliveryOutcome.DELIVERED_UNRECORDED:
            self.unrecorded += 1
