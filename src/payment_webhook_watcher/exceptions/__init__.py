"""Exceptions subpackage."""

from payment_webhook_watcher.exceptions.exceptions import (
    ChainAPIError,
    DeliveryFailedError,
    FetchExhaustedError,
    FetchInterruptedError,
    InvalidConfigError,
    MissingRequiredConfigError,
    PayloadDecodeError,
    RecordWriteFailedError,
    WebhookWatcherError,
)

__all__ = [
    "ChainAPIError",
    "DeliveryFailedError",
    "FetchExhaustedError",
    "FetchInterruptedError",
    "InvalidConfigError",
    "MissingRequiredConfigError",
    "PayloadDecodeError",
    "RecordWriteFailedError",
    "WebhookWatcherError",
]
