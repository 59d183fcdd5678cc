"""Retry policy shared by network reads."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

BackoffKind = Literal["linear", "exponential"]


def linear_backoff(base_seconds: float) -> Callable[[int], float]:
    """Delay before retry k is k * base_seconds."""

    def _delay(attempt: int) -> float:
        return attempt * base_seconds

    return _delay


def exponential_backoff(base_seconds: float, max_seconds: float) -> Callable[[int], float]:
    """Delay before retry k is base_seconds * 2**(k-1), capped at max_seconds.

    Once the cap is reached the delay grows by a millisecond per retry so the
    sequence stays strictly increasing.
    """

    def _delay(attempt: int) -> float:
        raw = base_seconds * (2 ** (attempt - 1))
        if raw <= max_seconds:
            return raw
        capped_at = 1
        while base_seconds * (2 ** capped_at) <= max_seconds:
            capped_at += 1
        return max_seconds + 0.001 * (attempt - capped_at)

    return _delay


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounded retry: max_attempts calls in total, backoff(k) seconds before retry k."""

    max_attempts: int
    backoff: Callable[[int], float]

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    def delay(self, attempt: int) -> float:
        """Seconds to wait before retry number `attempt` (1-based)."""
        return self.backoff(attempt)

    @classmethod
    def create(
        cls,
        *,
        max_attempts: int,
        kind: BackoffKind = "linear",
        base_seconds: float = 1.0,
        max_delay_seconds: float = 60.0,
    ) -> RetryPolicy:
        """Build a policy from a named backoff curve."""
        if kind == "exponential":
            return cls(max_attempts, exponential_backoff(base_seconds, max_delay_seconds))
        return cls(max_attempts, linear_backoff(base_seconds))
