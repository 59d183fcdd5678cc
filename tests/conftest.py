# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit and integration tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from payment_webhook_watcher.config import Settings
from payment_webhook_watcher.models.transaction import Transaction
from payment_webhook_watcher.persistence.repositories.in_memory import (
    InMemoryDeliveryLogRepository,
)


@pytest.fixture
def ton_address() -> str:
    """Default watched TON address used by tests."""
    return "EQBvW8Z5huBkMJYdnfAEM5JqTNkuWX3diqYENkWsIL0XggGG"


@pytest.fixture
def eth_address() -> str:
    """Default watched Ethereum address used by tests."""
    return "0x2d27b6e21b3d4d7c9a43fdf58f12345678907706"


@pytest.fixture
def settings_factory(tmp_path: Path) -> Callable[..., Settings]:
    """Build Settings with a temp delivery log dir and fast retries; sections merge overrides."""

    def _build(**overrides: Any) -> Settings:
        watcher = {"delivery_log_dir": str(tmp_path / "delivery_log"), "poll_seconds": 30.0}
        watcher.update(overrides.pop("watcher", {}))
        api = {"max_attempts": 3, "retry_base_seconds": 1.0}
        api.update(overrides.pop("api", {}))
        return Settings.from_env(watcher=watcher, api=api, **overrides)

    return _build


@pytest.fixture
def settings(settings_factory: Callable[..., Settings]) -> Settings:
    return settings_factory()


@pytest.fixture
def delivery_log() -> InMemoryDeliveryLogRepository:
    """Fresh in-memory delivery log per test."""
    return InMemoryDeliveryLogRepository()


@pytest.fixture
def tx_factory() -> Callable[..., Transaction]:
    """Build Transaction with sensible defaults and easy overrides."""

    counter = {"n": 0}

    def _build(**overrides: Any) -> Transaction:
        counter["n"] += 1
        return Transaction(
            hash=overrides.pop("hash", f"hash-{counter['n']}"),
            timestamp=overrides.pop("timestamp", 1_700_000_000),
            sender=overrides.pop("sender", None),
            recipient=overrides.pop("recipient", None),
            is_inbound=overrides.pop("is_inbound", None),
            payloads=tuple(overrides.pop("payloads", ())),
            payload_encoding=overrides.pop("payload_encoding", "text"),
            value=overrides.pop("value", None),
        )

    return _build


@pytest.fixture
def hex_payload() -> Callable[[str], str]:
    """Encode text the way Ethereum input data carries it: hex_payload("Order: 1") -> "0x4f72..."."""
    return lambda text: "0x" + text.encode("utf-8").hex()
