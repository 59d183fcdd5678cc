"""Orchestrator: runs one PollLoop per watched address until shutdown (signal or CancelledError)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import structlog

from payment_webhook_watcher.config import Settings
from payment_webhook_watcher.services.watcher.poll_loop import PollLoop
from payment_webhook_watcher.utils.validation import mask_address


class WatcherRunner:
    """Runs poll_loop.run() for each address in parallel until shutdown_event or CancelledError."""

    def __init__(
        self,
        poll_loop: PollLoop,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            poll_loop: Injected PollLoop (stateless across addresses).
            settings: Application settings (uses settings.watcher for logging context).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._poll_loop = poll_loop
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run(
        self,
        addresses: list[str],
        shutdown_event: asyncio.Event,
    ) -> None:
        """Start one poll task per address; return once all of them stopped.

        Setting shutdown_event lets every in-flight cycle finish. Cancelling
        this coroutine cancels the poll tasks instead.

        Args:
            addresses: Watched addresses.
            shutdown_event: When set, loops stop after their current cycle.
        """
        w = self._settings.watcher
        self._logger.info(
            "watcher_runner_started",
            watcher_chain=w.chain,
            watcher_addresses_count=len(addresses),
            watcher_poll_seconds=w.poll_seconds,
            watcher_limit=w.transactions_limit,
        )
        tasks = [
            asyncio.create_task(self._poll_loop.run(address, shutdown_event))
            for address in addresses
        ]

        try:
            results = await asyncio.gather(*tasks, return_exceptions=True)
        except asyncio.CancelledError:
            self._logger.info(
                "watcher_runner_shutdown_cancelled",
                message="Task cancelled; stopping poll loops",
            )
            for t in tasks:
                t.cancel()
            for t in tasks:
                try:
                    await t
                except asyncio.CancelledError:
                    pass
            raise

        for address, result in zip(addresses, results):
            if isinstance(result, BaseException):
                self._logger.error(
                    "watcher_runner_loop_crashed",
                    watcher_address_masked=mask_address(address),
                    error_type=type(result).__name__,
                    error_message=str(result),
                )
        self._logger.info("watcher_runner_stopped")
