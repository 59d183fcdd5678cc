# -*- coding: utf-8 -*-
"""Utility modules."""

from payment_webhook_watcher.utils.dedupe import dedup_key
from payment_webhook_watcher.utils.retry import (
    RetryPolicy,
    exponential_backoff,
    linear_backoff,
)
from payment_webhook_watcher.utils.validation import (
    is_hex_address,
    is_http_url,
    is_ton_address,
    mask_address,
)

__all__ = [
    "RetryPolicy",
    "dedup_key",
    "exponential_backoff",
    "is_hex_address",
    "is_http_url",
    "is_ton_address",
    "linear_backoff",
    "mask_address",
]
