# -*- coding: utf-8 -*-
"""Webhook delivery: at most one POST per tracked transaction per cycle.

The delivery log is the commit point. A record is written only after the
receiver answered 2xx, and its presence is what suppresses future POSTs. If
the process dies between the POST and the write, the next run delivers the
same transaction once more.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars

from payment_webhook_watcher.exceptions import DeliveryFailedError, RecordWriteFailedError
from payment_webhook_watcher.models.delivery_outcome import DeliveryOutcome
from payment_webhook_watcher.models.match_result import MatchResult
from payment_webhook_watcher.models.notification_record import NotificationRecord
from payment_webhook_watcher.models.transaction import Transaction
from payment_webhook_watcher.utils.dedupe import dedup_key
from payment_webhook_watcher.utils.validation import mask_address

if TYPE_CHECKING:
    from payment_webhook_watcher.clients.http import AsyncHttpClient
    from payment_webhook_watcher.persistence.repositories.interfaces import (
        IDeliveryLogRepository,
    )


class WebhookDeliveryService:
    """Sends NotificationRecords to the webhook receiver and records successful deliveries."""

    def __init__(
        self,
        http_client: AsyncHttpClient,
        delivery_log: IDeliveryLogRepository,
        webhook_uri: str,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            http_client: HTTP client used for the single POST.
            delivery_log: Durable record of delivered transactions.
            webhook_uri: Receiver URL.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._delivery_log = delivery_log
        self._webhook_uri = webhook_uri
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def deliver(
        self,
        address: str,
        tx: Transaction,
        match: MatchResult,
    ) -> DeliveryOutcome:
        """Deliver the notification for a tracked transaction unless already recorded.

        Args:
            address: Watched address; partitions the delivery log.
            tx: The tracked transaction.
            match: Its match result (order id may be None).

        Returns:
            SKIPPED if already recorded, FAILED if the receiver did not accept it,
            DELIVERED once recorded, DELIVERED_UNRECORDED if the record write failed.
        """
        key = dedup_key(tx.hash)
        with bound_contextvars(
            delivery_address_masked=mask_address(address),
            delivery_tx_hash=tx.hash,
        ):
            if await self._delivery_log.exists(address, key):
                self._logger.debug("delivery_skipped_already_recorded")
                return DeliveryOutcome.SKIPPED

            record = NotificationRecord.from_transaction(tx, match.order_id)
            try:
                status = await self._http.post_json(
                    self._webhook_uri,
                    json=record.to_payload(),
                    headers={"Idempotency-Key": key},
                )
            except DeliveryFailedError as e:
                self._logger.warning(
                    "delivery_failed",
                    delivery_order_id=record.order_id,
                    http_status_code=e.status_code,
                    error_message=str(e),
                )
                return DeliveryOutcome.FAILED

            try:
                await self._delivery_log.record(address, key, record)
            except RecordWriteFailedError as e:
                self._logger.critical(
                    "delivery_record_write_failed",
                    delivery_order_id=record.order_id,
                    delivery_key=e.key,
                    error_message=str(e),
                    error_cause=str(e.cause) if e.cause else None,
                    message="Webhook was accepted but not recorded; it may be sent again next cycle",
                )
                return DeliveryOutcome.DELIVERED_UNRECORDED

            self._logger.info(
                "delivery_succeeded",
                delivery_order_id=record.order_id,
                http_status_code=status,
            )
            return DeliveryOutcome.DELIVERED
