# -*- coding: utf-8 -*-
"""toncenter v2 HTTP API client (getTransactions)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional, cast
from structlog.contextvars import bound_contextvars

from payment_webhook_watcher.config import Settings
from payment_webhook_watcher.exceptions import ChainAPIError
from payment_webhook_watcher.models.transaction import Transaction
from payment_webhook_watcher.utils.validation import mask_address

if TYPE_CHECKING:
    from .http import AsyncHttpClient


class TonCenterClient:
    """Client for toncenter /getTransactions (TON)."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api.toncenter_host and api_key).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.toncenter_host.rstrip("/")

    def _headers(self) -> dict[str, str]:
        api_key = self._settings.api.api_key
        return {"X-API-Key": api_key} if api_key else {}

    async def get_transactions(self, address: str, *, limit: int = 20) -> list[Transaction]:
        """Fetch latest transactions for an address (most recent first).

        Items that cannot be normalised are logged and skipped.

        Raises:
            ChainAPIError: On HTTP failure or an ``ok: false`` envelope.
        """
        url = f"{self._base_url()}/getTransactions"
        with bound_contextvars(
            toncenter_address_masked=mask_address(address),
            toncenter_limit=limit,
        ):
            data = await self._http.get_json(
                url,
                params={"address": address, "limit": limit},
                headers=self._headers(),
            )
            if not isinstance(data, dict) or not data.get("ok", False):
                error = data.get("error") if isinstance(data, dict) else None
                raise ChainAPIError(
                    f"toncenter getTransactions failed: {error or 'unexpected response'}",
                    url=url,
                    status_code=data.get("code") if isinstance(data, dict) else None,
                )
            raw = data.get("result")
            if not isinstance(raw, list):
                self._logger.warning(
                    "toncenter_get_transactions_non_list",
                    toncenter_response_type=type(raw).__name__,
                )
                return []
            result: list[Transaction] = []
            for item in cast(list[Any], raw):
                if not isinstance(item, dict):
                    continue
                try:
                    result.append(Transaction.from_toncenter(cast(dict[str, Any], item)))
                except (ValueError, TypeError) as e:
                    self._logger.warning(
                        "toncenter_transaction_skipped",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
            return result
