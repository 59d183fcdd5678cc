"""Dependency injection."""

from payment_webhook_watcher.DI.container import Container

__all__ = ["Container"]
