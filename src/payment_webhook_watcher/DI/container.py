# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from payment_webhook_watcher.clients.chain_source import ITransactionSource
from payment_webhook_watcher.clients.etherscan import EtherscanClient
from payment_webhook_watcher.clients.http import AsyncHttpClient
from payment_webhook_watcher.clients.toncenter import TonCenterClient
from payment_webhook_watcher.config import Settings, get_settings
from payment_webhook_watcher.persistence.repositories.filesystem import (
    FileDeliveryLogRepository,
)
from payment_webhook_watcher.services.delivery import WebhookDeliveryService
from payment_webhook_watcher.services.fetching import ChainFetcher
from payment_webhook_watcher.services.matching import MatchPolicy, OrderMatcher
from payment_webhook_watcher.services.watcher import PollLoop, WatcherRunner


def _build_transaction_source(
    settings: Settings,
    http_client: AsyncHttpClient,
) -> ITransactionSource:
    """Pick the chain data source from settings.watcher.chain."""
    if settings.watcher.chain == "ethereum":
        return EtherscanClient(http_client=http_client, settings=settings)
    return TonCenterClient(http_client=http_client, settings=settings)


def _build_match_policy(settings: Settings) -> MatchPolicy:
    """Chain default policy with MATCHER__* overrides applied."""
    return MatchPolicy.for_chain(settings.watcher.chain).with_overrides(settings.matcher)


def _build_delivery_log(settings: Settings) -> FileDeliveryLogRepository:
    return FileDeliveryLogRepository(settings.watcher.delivery_log_dir)


def _webhook_uri(settings: Settings) -> str:
    return settings.watcher.webhook_uri


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP client, chain source, pipeline and runner.

    Override ``config`` to run with non-default settings:

        container = Container()
        container.config.override(providers.Object(settings))
    """

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    transaction_source = providers.Singleton(
        _build_transaction_source,
        config,
        http_client,
    )

    chain_fetcher = providers.Singleton(
        ChainFetcher,
        source=transaction_source,
        settings=config,
    )

    match_policy = providers.Singleton(_build_match_policy, config)

    order_matcher = providers.Singleton(
        OrderMatcher,
        policy=match_policy,
    )

    delivery_log_repository = providers.Singleton(_build_delivery_log, config)

    webhook_delivery_service = providers.Singleton(
        WebhookDeliveryService,
        http_client=http_client,
        delivery_log=delivery_log_repository,
        webhook_uri=providers.Callable(_webhook_uri, config),
    )

    poll_loop = providers.Singleton(
        PollLoop,
        fetcher=chain_fetcher,
        matcher=order_matcher,
        delivery=webhook_delivery_service,
        settings=config,
    )

    watcher_runner = providers.Singleton(
        WatcherRunner,
        poll_loop=poll_loop,
        settings=config,
    )
