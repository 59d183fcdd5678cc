# -*- coding: utf-8 -*-
"""Filesystem delivery log: one JSON file per delivered transaction.

Layout: ``<base_dir>/<dedup_key(namespace)>/<key>.json``. Records survive
process restarts, which is what stops a restarted watcher from notifying the
same transaction again.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path

from payment_webhook_watcher.exceptions import RecordWriteFailedError
from payment_webhook_watcher.models.notification_record import NotificationRecord
from payment_webhook_watcher.persistence.repositories.interfaces.delivery_log_repository import (
    IDeliveryLogRepository,
)
from payment_webhook_watcher.utils.dedupe import dedup_key


class FileDeliveryLogRepository(IDeliveryLogRepository):
    """Durable IDeliveryLogRepository backed by a directory tree."""

    def __init__(self, base_dir: str | os.PathLike[str]) -> None:
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, namespace: str, key: str) -> Path:
        """Return the record file path; key must already be a dedup key."""
        return self._base_dir / dedup_key(namespace.strip()) / f"{key}.json"

    async def exists(self, namespace: str, key: str) -> bool:
        return await asyncio.to_thread(self.path_for(namespace, key).is_file)

    async def record(self, namespace: str, key: str, record: NotificationRecord) -> None:
        path = self.path_for(namespace, key)
        try:
            await asyncio.to_thread(_write_atomic, path, record)
        except OSError as e:
            raise RecordWriteFailedError(
                f"Could not write delivery record {path}",
                key=key,
                cause=e,
            ) from e

    async def get(self, namespace: str, key: str) -> NotificationRecord | None:
        path = self.path_for(namespace, key)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            return None
        return NotificationRecord.from_payload(json.loads(text))


def _write_atomic(path: Path, record: NotificationRecord) -> None:
    """Write via a temp file in the same directory and rename over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(record.to_payload(), f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
