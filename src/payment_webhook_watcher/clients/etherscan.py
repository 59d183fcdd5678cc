# -*- coding: utf-8 -*-
"""Etherscan API client (account txlist)."""

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

_NO_TRANSACTIONS = "no transactions found"


class EtherscanClient:
    """Client for Etherscan ``module=account&action=txlist`` (Ethereum).

    Only plain ETH transfers carry the order marker in their input data; ERC-20
    transfers have no slot for it and never match.
    """

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
            settings: Application settings (uses settings.api.etherscan_host, ethereum_chain_id, api_key).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get_transactions(self, address: str, *, limit: int = 20) -> list[Transaction]:
        """Fetch latest normal transactions for an address (sort=desc).

        Raises:
            ChainAPIError: On HTTP failure or a ``status: "0"`` error response.
        """
        api = self._settings.api
        url = api.etherscan_host
        params: dict[str, Any] = {
            "chainid": api.ethereum_chain_id,
            "module": "account",
            "action": "txlist",
            "address": address,
            "startblock": 0,
            "endblock": 99999999,
            "page": 1,
            "offset": limit,
            "sort": "desc",
            "apikey": api.api_key or "",
        }
        with bound_contextvars(
            etherscan_address_masked=mask_address(address),
            etherscan_limit=limit,
        ):
            data = await self._http.get_json(url, params=params)
            if not isinstance(data, dict):
                raise ChainAPIError("etherscan txlist: unexpected response", url=url)
            raw = data.get("result")
            if str(data.get("status")) != "1":
                message = str(data.get("message") or "")
                if message.lower().startswith(_NO_TRANSACTIONS):
                    return []
                raise ChainAPIError(
                    f"etherscan txlist failed: {message} {raw if isinstance(raw, str) else ''}".strip(),
                    url=url,
                )
            if not isinstance(raw, list):
                self._logger.warning(
                    "etherscan_get_transactions_non_list",
                    etherscan_response_type=type(raw).__name__,
                )
                return []
            result: list[Transaction] = []
            for item in cast(list[Any], raw):
                if not isinstance(item, dict):
                    continue
                try:
                    result.append(
                        Transaction.from_etherscan(
                            cast(dict[str, Any], item), watched_address=address
                        )
                    )
                except (ValueError, TypeError, ArithmeticError) as e:
                    self._logger.warning(
                        "etherscan_transaction_skipped",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
            return result
