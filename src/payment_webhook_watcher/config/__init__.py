"""Configuration subpackage."""

from payment_webhook_watcher.config.config import (
    ApiSettings,
    AppSettings,
    ChainName,
    LoggingSettings,
    MatcherSettings,
    Settings,
    WatcherSettings,
    WebhookSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ChainName",
    "LoggingSettings",
    "MatcherSettings",
    "Settings",
    "WatcherSettings",
    "WebhookSettings",
    "get_settings",
]
