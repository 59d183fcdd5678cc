# -*- coding: utf-8 -*-
"""Application services."""

from payment_webhook_watcher.services.delivery import WebhookDeliveryService
from payment_webhook_watcher.services.fetching import ChainFetcher
from payment_webhook_watcher.services.matching import MatchPolicy, OrderMatcher
from payment_webhook_watcher.services.watcher import PollLoop, WatcherRunner

__all__ = [
    "ChainFetcher",
    "MatchPolicy",
    "OrderMatcher",
    "PollLoop",
    "WatcherRunner",
    "WebhookDeliveryService",
]
