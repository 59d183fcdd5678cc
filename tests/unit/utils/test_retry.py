# -*- coding: utf-8 -*-
"""Unit tests for RetryPolicy and backoff curves."""

from __future__ import annotations

import pytest

from payment_webhook_watcher.utils.retry import (
    RetryPolicy,
    exponential_backoff,
    linear_backoff,
)


def test_linear_backoff_is_attempt_times_base() -> None:
    delay = linear_backoff(1.0)
    assert [delay(k) for k in range(1, 5)] == [1.0, 2.0, 3.0, 4.0]


def test_exponential_backoff_doubles_until_cap() -> None:
    delay = exponential_backoff(1.0, 10.0)
    assert [delay(k) for k in range(1, 5)] == [1.0, 2.0, 4.0, 8.0]
    assert 10.0 <= delay(5) < 10.01


def test_exponential_backoff_stays_strictly_increasing_after_cap() -> None:
    delay = exponential_backoff(1.0, 10.0)
    delays = [delay(k) for k in range(1, 12)]
    assert all(a < b for a, b in zip(delays, delays[1:]))
    assert max(delays) < 10.1


def test_create_builds_linear_by_default() -> None:
    policy = RetryPolicy.create(max_attempts=10, base_seconds=2.0)
    assert policy.max_attempts == 10
    assert policy.delay(3) == 6.0


def test_create_builds_exponential_when_requested() -> None:
    policy = RetryPolicy.create(max_attempts=4, kind="exponential", base_seconds=0.5)
    assert [policy.delay(k) for k in (1, 2, 3)] == [0.5, 1.0, 2.0]


def test_policy_requires_at_least_one_attempt() -> None:
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0, backoff=linear_backoff(1.0))
