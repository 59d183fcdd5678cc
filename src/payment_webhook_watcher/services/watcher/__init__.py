"""Poll loop and multi-address runner."""

from payment_webhook_watcher.services.watcher.poll_loop import PollLoop
from payment_webhook_watcher.services.watcher.watcher_runner import WatcherRunner

__all__ = ["PollLoop", "WatcherRunner"]
