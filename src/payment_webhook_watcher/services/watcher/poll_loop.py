"""Poll loop: fetch -> match -> deliver on a fixed interval for one address."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import structlog

from payment_webhook_watcher.exceptions import FetchExhaustedError, FetchInterruptedError
from payment_webhook_watcher.models.cycle_report import CycleReport
from payment_webhook_watcher.utils.validation import mask_address

if TYPE_CHECKING:
    from payment_webhook_watcher.config import Settings
    from payment_webhook_watcher.services.delivery import WebhookDeliveryService
    from payment_webhook_watcher.services.fetching import ChainFetcher
    from payment_webhook_watcher.services.matching import OrderMatcher


class PollLoop:
    """Runs poll cycles for a watched address until a shutdown is requested.

    Idle -> Cycle-Running on startup (immediately) and on every tick. A failing
    transaction is logged and skipped; a failing fetch aborts only its cycle.
    """

    def __init__(
        self,
        fetcher: ChainFetcher,
        matcher: OrderMatcher,
        delivery: WebhookDeliveryService,
        settings: Settings,
        *,
        tick: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the loop.

        Args:
            fetcher: Chain fetcher (with retries).
            matcher: Order matcher.
            delivery: Webhook delivery service.
            settings: Application settings (uses settings.watcher.poll_seconds).
            tick: Awaitable that returns when the next cycle is due; receives the
                interval in seconds. Injected in tests to drive cycles deterministically.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._fetcher = fetcher
        self._matcher = matcher
        self._delivery = delivery
        self._poll_seconds = settings.watcher.poll_seconds
        self._tick = tick
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run_cycle(
        self,
        address: str,
        shutdown_event: asyncio.Event | None = None,
    ) -> CycleReport:
        """Run one fetch-match-deliver pass. Never raises except on cancellation.

        A shutdown_event set while the fetch is waiting to retry ends the cycle
        early; once transactions are fetched the cycle always runs to the end.
        """
        report = CycleReport(address=address)
        address_masked = mask_address(address)
        try:
            transactions = await self._fetcher.fetch(address, stop_event=shutdown_event)
        except FetchInterruptedError as e:
            report.aborted = True
            self._logger.info(
                "poll_cycle_aborted",
                poll_address_masked=address_masked,
                poll_abort_reason="shutdown",
                poll_fetch_attempts=e.attempts,
            )
            return report
        except FetchExhaustedError as e:
            report.aborted = True
            self._logger.error(
                "poll_cycle_aborted",
                poll_address_masked=address_masked,
                poll_abort_reason="fetch_exhausted",
                error_message=str(e),
            )
            return report
        except Exception as e:
            report.aborted = True
            self._logger.exception(
                "poll_cycle_aborted",
                poll_address_masked=address_masked,
                poll_abort_reason="unexpected_error",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return report

        report.fetched = len(transactions)
        for tx in transactions:
            try:
                match = self._matcher.match(tx)
                if not match.tracked:
                    continue
                report.tracked += 1
                outcome = await self._delivery.deliver(address, tx, match)
                report.count(outcome)
            except Exception as e:
                report.errors += 1
                self._logger.exception(
                    "poll_transaction_failed",
                    poll_address_masked=address_masked,
                    poll_tx_hash=tx.hash,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

        self._logger.info(
            "poll_cycle_completed",
            poll_address_masked=address_masked,
            poll_fetched=report.fetched,
            poll_tracked=report.tracked,
            poll_delivered=report.delivered,
            poll_skipped=report.skipped,
            poll_failed=report.failed,
            poll_unrecorded=report.unrecorded,
            poll_errors=report.errors,
        )
        return report

    async def run(self, address: str, shutdown_event: asyncio.Event) -> None:
        """Run cycles until shutdown_event is set.

        The first cycle starts immediately. A shutdown request never interrupts
        deliveries in progress; it is honoured once the cycle finishes, while
        idle, or while a failing fetch waits to be retried.
        """
        address_masked = mask_address(address)
        self._logger.info(
            "poll_loop_started",
            poll_address_masked=address_masked,
            poll_seconds=self._poll_seconds,
        )
        try:
            while not shutdown_event.is_set():
                await self.run_cycle(address, shutdown_event)
                if shutdown_event.is_set():
                    break
                await self._wait_for_tick(shutdown_event)
        except asyncio.CancelledError:
            self._logger.debug(
                "poll_loop_stopped",
                poll_address_masked=address_masked,
                poll_stop_reason="cancelled",
            )
            raise
        self._logger.info(
            "poll_loop_stopped",
            poll_address_masked=address_masked,
            poll_stop_reason="shutdown",
        )

    async def _wait_for_tick(self, shutdown_event: asyncio.Event) -> None:
        """Return when the tick fires or shutdown_event is set, whichever is first."""
        tick_task = asyncio.ensure_future(self._tick(self._poll_seconds))
        stop_task = asyncio.ensure_future(shutdown_event.wait())
        try:
            await asyncio.wait({tick_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (tick_task, stop_task):
                if not task.done():
                    task.cancel()
            await asyncio.gather(tick_task, stop_task, return_exceptions=True)
