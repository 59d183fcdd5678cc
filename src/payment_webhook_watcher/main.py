# -*- coding: utf-8 -*-
"""
Entry point for the payment webhook watcher.

Orchestrates: arguments, settings, logging, container, watcher runner, shutdown (SIGINT/SIGTERM or CancelledError).
Pipeline per address: poll -> fetch (retries) -> match -> deliver (once) -> record.

Run with:
    payment-webhook-watcher <address> <webhook_uri> [api_key] [--chain ton|ethereum]
    python -m payment_webhook_watcher.main <address> <webhook_uri> [api_key]

Positional inputs override WATCHER__TARGET_ADDRESS, WATCHER__WEBHOOK_URI and API__API_KEY.
"""
from __future__ import annotations

import argparse
import asyncio
import signal
import structlog
from collections.abc import Sequence
from typing import Any, Optional

from dependency_injector import providers

from payment_webhook_watcher.DI import Container
from payment_webhook_watcher.config import Settings
from payment_webhook_watcher.exceptions import InvalidConfigError, MissingRequiredConfigError
from payment_webhook_watcher.logging.config import configure_logging
from payment_webhook_watcher.utils import is_hex_address, is_http_url, is_ton_address, mask_address


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="payment-webhook-watcher",
        description="Watch an address for payment-order transactions and deliver webhooks.",
    )
    parser.add_argument("address", nargs="?", help="Watched wallet address.")
    parser.add_argument("webhook_uri", nargs="?", help="URL that receives the notifications.")
    parser.add_argument(
        "api_key",
        nargs="?",
        help="Chain API credential (required for ethereum, optional for ton).",
    )
    parser.add_argument(
        "--chain",
        choices=("ton", "ethereum"),
        default=None,
        help="Chain data source (default: WATCHER__CHAIN or ton).",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Settings from environment with command-line values layered on top."""
    watcher: dict[str, Any] = {}
    api: dict[str, Any] = {}
    if args.address:
        watcher["target_address"] = args.address
    if args.webhook_uri:
        watcher["webhook_uri"] = args.webhook_uri
    if args.chain:
        watcher["chain"] = args.chain
    if args.api_key:
        api["api_key"] = args.api_key

    overrides: dict[str, Any] = {}
    if watcher:
        overrides["watcher"] = watcher
    if api:
        overrides["api"] = api
    return Settings.from_env(**overrides)


def resolve_addresses(settings: Settings) -> list[str]:
    """Validate startup configuration and return the watched addresses.

    Raises:
        MissingRequiredConfigError: If address, webhook URI or a required API key is absent.
        InvalidConfigError: If a value is present but unusable.
    """
    w = settings.watcher
    addresses = w.target_addresses
    if not addresses:
        raise MissingRequiredConfigError("WATCHER__TARGET_ADDRESS")
    if not w.webhook_uri.strip():
        raise MissingRequiredConfigError("WATCHER__WEBHOOK_URI")
    if not is_http_url(w.webhook_uri):
        raise InvalidConfigError("WATCHER__WEBHOOK_URI", "must be an absolute http(s) URL")
    if w.chain == "ethereum" and not settings.api.api_key:
        raise MissingRequiredConfigError("API__API_KEY")
    if w.chain == "ethereum":
        is_valid, expected = is_hex_address, "a 0x address"
    else:
        is_valid, expected = is_ton_address, "a TON address"
    for address in addresses:
        if not is_valid(address):
            raise InvalidConfigError(
                "WATCHER__TARGET_ADDRESS",
                f"{mask_address(address)} is not {expected}",
            )
    return addresses


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass  # Windows has no add_signal_handler


async def run(settings: Settings, addresses: list[str]) -> None:
    """Run the watcher until SIGINT/SIGTERM (in-flight cycles finish) or cancellation."""
    logger = structlog.get_logger("main")
    container = Container()
    container.config.override(providers.Object(settings))
    http_client = container.http_client()
    runner = container.watcher_runner()

    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)

    logger.info(
        "main_watcher_started",
        watcher_chain=settings.watcher.chain,
        watcher_addresses=[mask_address(a) for a in addresses],
        watcher_poll_seconds=settings.watcher.poll_seconds,
        watcher_delivery_log_dir=settings.watcher.delivery_log_dir,
    )
    try:
        await runner.run(addresses, shutdown_event)
    finally:
        await http_client.aclose()
        logger.info("main_shutdown_complete")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = build_settings(args)
    configure_logging(settings)
    logger = structlog.get_logger("main")

    try:
        addresses = resolve_addresses(settings)
    except (MissingRequiredConfigError, InvalidConfigError) as e:
        logger.error(
            "main_invalid_configuration",
            setting=e.setting,
            message=str(e),
        )
        return 1

    try:
        asyncio.run(run(settings, addresses))
    except KeyboardInterrupt:
        pass
    return 0


__all__ = ["build_settings", "main", "parse_args", "resolve_addresses", "run"]

if __name__ == "__main__":
    raise SystemExit(main())
