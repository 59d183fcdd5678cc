"""Custom exceptions for chain reads, matching and webhook delivery."""

from __future__ import annotations


class WebhookWatcherError(Exception):
    """Base exception for watcher errors."""

    pass


class MissingRequiredConfigError(WebhookWatcherError):
    """Raised when a required configuration value is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"Missing required configuration: {setting}")
        self.setting = setting


class InvalidConfigError(WebhookWatcherError):
    """Raised when a configuration value is present but unusable."""

    def __init__(self, setting: str, reason: str) -> None:
        super().__init__(f"Invalid configuration {setting}: {reason}")
        self.setting = setting
        self.reason = reason


class ChainAPIError(WebhookWatcherError):
    """Raised when a single read from the chain data source fails."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class FetchExhaustedError(WebhookWatcherError):
    """Raised when every read attempt of a poll cycle has failed."""

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.cause = cause


class FetchInterruptedError(FetchExhaustedError):
    """Raised when shutdown was requested while a failing read was waiting to be retried."""

    pass


class PayloadDecodeError(WebhookWatcherError):
    """Raised when a message payload cannot be interpreted as text."""

    pass


class DeliveryFailedError(WebhookWatcherError):
    """Raised when the webhook receiver did not accept a notification."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RecordWriteFailedError(WebhookWatcherError):
    """Raised when a delivery record could not be persisted after a successful POST."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.cause = cause
