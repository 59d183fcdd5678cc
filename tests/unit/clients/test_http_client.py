# -*- coding: utf-8 -*-
"""Unit tests for AsyncHttpClient against a local aiohttp server."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from payment_webhook_watcher.clients.http import AsyncHttpClient
from payment_webhook_watcher.config import Settings
from payment_webhook_watcher.exceptions import ChainAPIError, DeliveryFailedError


@pytest.fixture
def received() -> list[dict[str, Any]]:
    """Requests captured by the /hook endpoint."""
    return []


@pytest.fixture
async def server(received: list[dict[str, Any]]) -> AsyncIterator[TestServer]:

    async def ok_json(request: web.Request) -> web.Response:
        return web.json_response({"ok": True, "query": dict(request.query)})

    async def broken(request: web.Request) -> web.Response:
        return web.Response(status=503)

    async def not_json(request: web.Request) -> web.Response:
        return web.Response(text="<html>", content_type="text/html")

    async def slow(request: web.Request) -> web.Response:
        await asyncio.sleep(2)
        return web.Response(status=200)

    async def hook(request: web.Request) -> web.Response:
        received.append(
            {
                "content_type": request.content_type,
                "idempotency_key": request.headers.get("Idempotency-Key"),
                "user_agent": request.headers.get("User-Agent"),
                "body": await request.json(),
            }
        )
        return web.Response(status=int(request.query.get("status", "200")))

    app = web.Application()
    app.router.add_get("/ok", ok_json)
    app.router.add_get("/broken", broken)
    app.router.add_get("/html", not_json)
    app.router.add_post("/hook", hook)
    app.router.add_post("/slow", slow)
    async with TestServer(app) as srv:
        yield srv


@pytest.fixture
async def client(settings: Settings) -> AsyncIterator[AsyncHttpClient]:
    async with AsyncHttpClient(settings) as http:
        yield http


async def test_get_json_returns_parsed_body(server: TestServer, client: AsyncHttpClient) -> None:
    data = await client.get_json(str(server.make_url("/ok")), params={"limit": 20})
    assert data == {"ok": True, "query": {"limit": "20"}}


async def test_get_json_raises_chain_api_error_on_5xx(
    server: TestServer, client: AsyncHttpClient
) -> None:
    with pytest.raises(ChainAPIError) as exc_info:
        await client.get_json(str(server.make_url("/broken")))
    assert exc_info.value.status_code == 503


async def test_get_json_raises_chain_api_error_on_non_json(
    server: TestServer, client: AsyncHttpClient
) -> None:
    with pytest.raises(ChainAPIError):
        await client.get_json(str(server.make_url("/html")))


async def test_get_json_raises_chain_api_error_on_connection_error(
    client: AsyncHttpClient,
) -> None:
    with pytest.raises(ChainAPIError) as exc_info:
        await client.get_json("http://127.0.0.1:1/unreachable")
    assert exc_info.value.cause is not None


async def test_post_json_sends_json_body(
    server: TestServer, client: AsyncHttpClient, received: list[dict[str, Any]]
) -> None:
    status = await client.post_json(
        str(server.make_url("/hook")),
        json={"hash": "h"},
        headers={"Idempotency-Key": "h"},
    )

    assert status == 200
    assert received == [
        {
            "content_type": "application/json",
            "idempotency_key": "h",
            "user_agent": "payment-webhook-watcher",
            "body": {"hash": "h"},
        }
    ]


async def test_post_json_accepts_any_2xx(server: TestServer, client: AsyncHttpClient) -> None:
    status = await client.post_json(str(server.make_url("/hook?status=204")), json={})
    assert status == 204


async def test_post_json_raises_delivery_failed_on_non_2xx(
    server: TestServer, client: AsyncHttpClient
) -> None:
    with pytest.raises(DeliveryFailedError) as exc_info:
        await client.post_json(str(server.make_url("/hook?status=500")), json={"hash": "h"})
    assert exc_info.value.status_code == 500


async def test_post_json_times_out(
    server: TestServer, settings_factory: Any
) -> None:
    settings = settings_factory(webhook={"timeout_seconds": 0.5})
    async with AsyncHttpClient(settings) as http:
        with pytest.raises(DeliveryFailedError) as exc_info:
            await http.post_json(str(server.make_url("/slow")), json={})
    assert isinstance(exc_info.value.cause, asyncio.TimeoutError)
