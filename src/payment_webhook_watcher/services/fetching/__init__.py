"""Chain fetching services."""

from payment_webhook_watcher.services.fetching.chain_fetcher import (
    ChainFetcher,
    retry_policy_from_settings,
)

__all__ = ["ChainFetcher", "retry_policy_from_settings"]
