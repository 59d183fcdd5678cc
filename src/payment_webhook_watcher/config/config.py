# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, WATCHER__POLL_SECONDS.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

ChainName = Literal["ton", "ethereum"]


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "payment-webhook-watcher"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/webhook_watcher.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the chain data sources (toncenter, Etherscan)."""

    model_config = SettingsConfigDict(extra="ignore")

    toncenter_host: str = Field(
        default="https://toncenter.com/api/v2",
        description="toncenter v2 HTTP API base URL.",
    )
    etherscan_host: str = Field(
        default="https://api.etherscan.io/v2/api",
        description="Etherscan API endpoint.",
    )
    ethereum_chain_id: int = Field(
        default=1,
        description="Chain ID passed to Etherscan (1 = Ethereum mainnet).",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="Chain API credential (required for Etherscan, optional for toncenter).",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds for chain reads.",
    )
    max_attempts: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum number of read attempts per poll cycle.",
    )
    retry_backoff: Literal["linear", "exponential"] = Field(
        default="linear",
        description="Delay curve between read attempts.",
    )
    retry_base_seconds: float = Field(
        default=1.0,
        gt=0.0,
        le=60.0,
        description="Base delay; linear waits attempt * base, exponential base * 2**(attempt-1).",
    )
    retry_max_delay_seconds: float = Field(
        default=60.0,
        gt=0.0,
        le=600.0,
        description="Upper bound for a single exponential delay.",
    )


class WebhookSettings(BaseSettings):
    """Webhook delivery (from env WEBHOOK__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    timeout_seconds: float = Field(
        default=10.0,
        ge=0.5,
        le=120.0,
        description="Timeout for the single webhook POST per transaction and cycle.",
    )


class WatcherSettings(BaseSettings):
    """Configuration for address watching (polling)."""

    model_config = SettingsConfigDict(extra="ignore")

    chain: ChainName = Field(
        default="ton",
        description="Which chain data source to poll.",
    )
    target_address: str = Field(
        default="",
        description="Primary watched address. Env: WATCHER__TARGET_ADDRESS.",
    )
    # Raw string from env so pydantic-settings does not try to JSON-decode it (list[str] would trigger json.loads).
    target_addresses_raw: str = Field(
        default="",
        description="Extra watched addresses, comma-separated. Env: WATCHER__TARGET_ADDRESSES.",
        validation_alias="target_addresses",
    )
    webhook_uri: str = Field(
        default="",
        description="Webhook receiver URL. Env: WATCHER__WEBHOOK_URI.",
    )
    poll_seconds: float = Field(
        default=30.0,
        ge=0.5,
        le=3600.0,
        description="Polling interval in seconds.",
    )
    transactions_limit: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Number of recent transactions to fetch per poll.",
    )
    delivery_log_dir: str = Field(
        default="wh_delivery_log",
        description="Directory holding one delivery record per delivered transaction.",
    )

    @computed_field
    @property
    def target_addresses(self) -> list[str]:
        """Primary address plus comma-separated extras, normalised and de-duplicated in order.

        Ethereum addresses are case-insensitive (EIP-55 checksum casing is
        cosmetic), so they are lowercased; every consumer, including the
        delivery log namespace, sees one spelling per account.
        """
        candidates = [self.target_address, *self.target_addresses_raw.split(",")]
        result: list[str] = []
        for raw in candidates:
            address = raw.strip()
            if self.chain == "ethereum":
                address = address.lower()
            if address and address not in result:
                result.append(address)
        return result


class MatcherSettings(BaseSettings):
    """Overrides for the chain's built-in match policy (from env MATCHER__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    markers_raw: str = Field(
        default="",
        description="Comma-separated marker substrings. Empty keeps the chain default.",
        validation_alias="markers",
    )
    order_pattern: Optional[str] = Field(
        default=None,
        description="Regex with one capture group for the order id. None keeps the chain default.",
    )
    case_sensitive: Optional[bool] = None
    inbound_only: Optional[bool] = None

    @computed_field
    @property
    def markers(self) -> list[str]:
        """Parse comma-separated markers_raw into list of stripped strings."""
        if not self.markers_raw or not self.markers_raw.strip():
            return []
        return [s.strip() for s in self.markers_raw.split(",") if s.strip()]


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, API__MAX_ATTEMPTS.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    webhook: WebhookSettings = Field(default_factory=WebhookSettings)
    watcher: WatcherSettings = Field(default_factory=WatcherSettings)
    matcher: MatcherSettings = Field(default_factory=MatcherSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides are passed as nested dicts, e.g.:
        - from_env(api={"max_attempts": 3})
        - from_env(watcher={"chain": "ethereum", "webhook_uri": "http://..."})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from payment_webhook_watcher.config import get_settings

        settings = get_settings()
        poll_seconds = settings.watcher.poll_seconds
    """
    return Settings()
