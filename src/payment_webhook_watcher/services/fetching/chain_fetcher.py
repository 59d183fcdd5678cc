"""Chain fetcher: recent transactions for an address with bounded retries."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars

from payment_webhook_watcher.exceptions import (
    ChainAPIError,
    FetchExhaustedError,
    FetchInterruptedError,
)
from payment_webhook_watcher.models.transaction import Transaction
from payment_webhook_watcher.utils.retry import RetryPolicy
from payment_webhook_watcher.utils.validation import mask_address

if TYPE_CHECKING:
    from payment_webhook_watcher.clients.chain_source import ITransactionSource
    from payment_webhook_watcher.config import Settings


def retry_policy_from_settings(settings: Settings) -> RetryPolicy:
    """Build the read retry policy from settings.api."""
    api = settings.api
    return RetryPolicy.create(
        max_attempts=api.max_attempts,
        kind=api.retry_backoff,
        base_seconds=api.retry_base_seconds,
        max_delay_seconds=api.retry_max_delay_seconds,
    )


class ChainFetcher:
    """Fetches up to N recent transactions, retrying failed reads with increasing delays."""

    def __init__(
        self,
        source: ITransactionSource,
        settings: Settings,
        *,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            source: Chain data source (toncenter, Etherscan, ...).
            settings: Application settings (uses settings.watcher.transactions_limit and settings.api).
            retry_policy: Overrides the policy built from settings.api.
            sleep: Awaitable used between attempts (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._source = source
        self._limit = settings.watcher.transactions_limit
        self._policy = retry_policy or retry_policy_from_settings(settings)
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._policy

    async def fetch(
        self,
        address: str,
        *,
        stop_event: asyncio.Event | None = None,
    ) -> list[Transaction]:
        """Return the newest transactions (source order, at most the configured limit).

        Args:
            address: Watched address.
            stop_event: When set during a retry wait, no further attempt is made.

        Raises:
            FetchInterruptedError: If stop_event was set before a retry.
            FetchExhaustedError: After max_attempts failed reads.
        """
        max_attempts = self._policy.max_attempts
        last_error: Exception | None = None

        with bound_contextvars(
            fetch_address_masked=mask_address(address),
            fetch_max_attempts=max_attempts,
        ):
            for attempt in range(1, max_attempts + 1):
                try:
                    transactions = await self._source.get_transactions(address, limit=self._limit)
                    return list(transactions[: self._limit])
                except ChainAPIError as e:
                    last_error = e
                    if attempt == max_attempts:
                        break
                    delay = self._policy.delay(attempt)
                    self._logger.info(
                        "fetch_retry",
                        fetch_attempt=attempt,
                        fetch_retry_delay_seconds=delay,
                        error_message=str(e),
                        http_status_code=e.status_code,
                    )
                    if not await self._wait_before_retry(delay, stop_event):
                        self._logger.info("fetch_interrupted", fetch_attempts=attempt)
                        raise FetchInterruptedError(
                            f"Fetch stopped by shutdown after {attempt} failed attempts",
                            attempts=attempt,
                            cause=e,
                        ) from e

            self._logger.error(
                "fetch_exhausted",
                fetch_attempts=max_attempts,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise FetchExhaustedError(
                f"Failed to fetch transactions after {max_attempts} attempts",
                attempts=max_attempts,
                cause=last_error,
            ) from last_error

    async def _wait_before_retry(self, delay: float, stop_event: asyncio.Event | None) -> bool:
        """Sleep for delay; return False if stop_event is (or becomes) set first."""
        if stop_event is None:
            await self._sleep(delay)
            return True
        if stop_event.is_set():
            return False
        sleep_task = asyncio.ensure_future(self._sleep(delay))
        stop_task = asyncio.ensure_future(stop_event.wait())
        try:
            await asyncio.wait({sleep_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleep_task, stop_task):
                if not task.done():
                    task.cancel()
            await asyncio.gather(sleep_task, stop_task, return_exceptions=True)
        return not stop_event.is_set()
