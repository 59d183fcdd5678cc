# -*- coding: utf-8 -*-
"""Unit tests for the delivery log repositories (in-memory and filesystem)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from payment_webhook_watcher.exceptions import RecordWriteFailedError
from payment_webhook_watcher.models.notification_record import NotificationRecord
from payment_webhook_watcher.persistence.repositories.filesystem import (
    FileDeliveryLogRepository,
)
from payment_webhook_watcher.persistence.repositories.in_memory import (
    InMemoryDeliveryLogRepository,
)
from payment_webhook_watcher.persistence.repositories.interfaces import (
    IDeliveryLogRepository,
)
from payment_webhook_watcher.utils.dedupe import dedup_key


def _record(tx_hash: str = "abc/def=") -> NotificationRecord:
    return NotificationRecord(
        hash=tx_hash,
        time="2023-11-14T22:13:20.000Z",
        order_id="42",
    )


async def test_in_memory_exists_after_record(delivery_log: InMemoryDeliveryLogRepository) -> None:
    key = dedup_key("abc/def=")
    assert not await delivery_log.exists("addr", key)

    await delivery_log.record("addr", key, _record())

    assert await delivery_log.exists("addr", key)
    assert await delivery_log.get("addr", key) == _record()


async def test_in_memory_namespaces_are_isolated(
    delivery_log: InMemoryDeliveryLogRepository,
) -> None:
    await delivery_log.record("addr-a", "k", _record())
    assert not await delivery_log.exists("addr-b", "k")


async def test_in_memory_record_twice_is_harmless(
    delivery_log: InMemoryDeliveryLogRepository,
) -> None:
    await delivery_log.record("addr", "k", _record())
    await delivery_log.record("addr", "k", _record())
    assert len(delivery_log) == 1


async def test_file_repository_writes_json_record(tmp_path: Path) -> None:
    repo = FileDeliveryLogRepository(tmp_path)
    key = dedup_key("abc/def=")

    await repo.record("EQaddr", key, _record())

    path = repo.path_for("EQaddr", key)
    assert path == tmp_path / "EQaddr" / "abc%2Fdef%3D.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "hash": "abc/def=",
        "time": "2023-11-14T22:13:20.000Z",
        "orderId": "42",
    }


async def test_file_repository_survives_new_instance(tmp_path: Path) -> None:
    key = dedup_key("0xabc")
    await FileDeliveryLogRepository(tmp_path).record("0xaddr", key, _record("0xabc"))

    restarted = FileDeliveryLogRepository(tmp_path)

    assert await restarted.exists("0xaddr", key)
    assert await restarted.get("0xaddr", key) == _record("0xabc")


async def test_file_repository_missing_record(tmp_path: Path) -> None:
    repo = FileDeliveryLogRepository(tmp_path)
    assert not await repo.exists("0xaddr", "nope")
    assert await repo.get("0xaddr", "nope") is None


async def test_file_repository_partitions_by_address(tmp_path: Path) -> None:
    repo = FileDeliveryLogRepository(tmp_path)
    await repo.record("0xaaa", "k", _record())
    assert not await repo.exists("0xbbb", "k")


async def test_file_repository_overwrites_on_second_record(tmp_path: Path) -> None:
    repo = FileDeliveryLogRepository(tmp_path)
    await repo.record("0xaddr", "k", _record())
    await repo.record("0xaddr", "k", _record())

    files = list((tmp_path / "0xaddr").iterdir())
    assert [f.name for f in files] == ["k.json"]


async def test_file_repository_wraps_os_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    repo = FileDeliveryLogRepository(blocker)

    with pytest.raises(RecordWriteFailedError) as exc_info:
        await repo.record("0xaddr", "k", _record())

    assert exc_info.value.key == "k"
    assert isinstance(exc_info.value.cause, OSError)


def test_repository_must_implement_get() -> None:
    class ExistsOnly(IDeliveryLogRepository):
        async def exists(self, namespace: str, key: str) -> bool:
            return True

        async def record(self, namespace: str, key: str, record: NotificationRecord) -> None:
            pass

    with pytest.raises(TypeError):
        ExistsOnly()  # type: ignore[abstract]


@pytest.mark.parametrize("kind", ["memory", "file"])
async def test_get_returns_recorded_record_and_none_otherwise(kind: str, tmp_path: Path) -> None:
    repo: IDeliveryLogRepository = (
        InMemoryDeliveryLogRepository() if kind == "memory" else FileDeliveryLogRepository(tmp_path)
    )
    key = dedup_key("abc/def=")

    assert await repo.get("addr", key) is None
    await repo.record("addr", key, _record())

    assert await repo.get("addr", key) == _record()
    assert await repo.get("other-addr", key) is None
