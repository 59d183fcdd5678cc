# -*- coding: utf-8 -*-
"""Async HTTP transport shared by the chain sources and the webhook delivery.

Every call is a single attempt bounded by a timeout; retry decisions belong to
the caller (the chain fetcher retries reads, webhook POSTs are never retried
within a cycle). Failures surface as ChainAPIError for reads and
DeliveryFailedError for POSTs.
"""

from __future__ import annotations

import asyncio
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from payment_webhook_watcher.config import Settings
from payment_webhook_watcher.exceptions import ChainAPIError, DeliveryFailedError

_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


class AsyncHttpClient:
    """One lazily opened aiohttp session, used for chain reads and webhook POSTs.

    A session passed in by the caller is borrowed and never closed here;
    otherwise the client opens its own on first use and closes it in aclose()
    (or on leaving ``async with``).
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (api.timeout_seconds for reads,
                webhook.timeout_seconds for POSTs, app.app_name as User-Agent).
            session: Optional borrowed aiohttp session.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._read_timeout = aiohttp.ClientTimeout(total=settings.api.timeout_seconds)
        self._post_timeout = aiohttp.ClientTimeout(total=settings.webhook.timeout_seconds)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _session_or_open(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._read_timeout,
                headers={"User-Agent": self._settings.app.app_name},
            )
            self._owns_session = True
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client opened it."""
        session, self._session = self._session, None
        if self._owns_session and session is not None and not session.closed:
            await session.close()

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def get_json(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET once and return the decoded JSON body (dict or list).

        Raises:
            ChainAPIError: On transport error, timeout, non-2xx status or a non-JSON body.
        """
        with bound_contextvars(http_method="GET", http_url=url, http_request_id=uuid.uuid4().hex[:12]):
            try:
                async with self._session_or_open().get(
                    url, params=params or {}, headers=headers, timeout=self._read_timeout
                ) as response:
                    if response.status >= 300:
                        self._logger.debug("http_get_rejected", http_status_code=response.status)
                        raise ChainAPIError(
                            f"GET {url} returned HTTP {response.status}",
                            url=url,
                            status_code=response.status,
                        )
                    return await response.json(content_type=None)
            except (*_TRANSPORT_ERRORS, ValueError) as e:
                self._logger.debug(
                    "http_get_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise ChainAPIError(
                    f"GET {url} failed: {type(e).__name__}",
                    url=url,
                    cause=e,
                ) from e

    async def post_json(
        self,
        url: str,
        *,
        json: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> int:
        """POST a JSON body once (Content-Type: application/json).

        Returns:
            The 2xx status code returned by the receiver.

        Raises:
            DeliveryFailedError: On transport error, timeout or non-2xx status.
        """
        with bound_contextvars(http_method="POST", http_url=url, http_request_id=uuid.uuid4().hex[:12]):
            try:
                async with self._session_or_open().post(
                    url, json=json, headers=headers, timeout=self._post_timeout
                ) as response:
                    if not 200 <= response.status < 300:
                        self._logger.debug("http_post_rejected", http_status_code=response.status)
                        raise DeliveryFailedError(
                            f"POST {url} returned HTTP {response.status}",
                            url=url,
                            status_code=response.status,
                        )
                    return response.status
            except _TRANSPORT_ERRORS as e:
                self._logger.debug(
                    "http_post_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise DeliveryFailedError(
                    f"POST {url} failed: {type(e).__name__}",
                    url=url,
                    cause=e,
                ) from e
