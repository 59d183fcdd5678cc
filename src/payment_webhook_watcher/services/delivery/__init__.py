"""Webhook delivery services."""

from payment_webhook_watcher.services.delivery.webhook_delivery import WebhookDeliveryService

__all__ = ["WebhookDeliveryService"]
