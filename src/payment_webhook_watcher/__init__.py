"""Payment webhook watcher: poll an address, match payment orders, deliver webhooks once."""

from payment_webhook_watcher.clients import (
    AsyncHttpClient,
    EtherscanClient,
    TonCenterClient,
)
from payment_webhook_watcher.config import get_settings
from payment_webhook_watcher.DI import Container
from payment_webhook_watcher.services import PollLoop, WatcherRunner

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "EtherscanClient",
    "TonCenterClient",
    "Container",
    "PollLoop",
    "WatcherRunner",
    "get_settings",
]
