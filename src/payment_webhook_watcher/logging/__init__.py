"""Logging subpackage."""

from payment_webhook_watcher.logging.config import configure_logging

__all__ = ["configure_logging"]
