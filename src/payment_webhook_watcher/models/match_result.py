"""MatchResult: outcome of inspecting one transaction's payloads."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Whether a transaction is a tracked payment and, if parseable, its order id.

    ``tracked=True`` with ``order_id=None`` is valid: the marker was found but
    no order id followed it.
    """

    tracked: bool
    order_id: str | None = None

    @classmethod
    def not_tracked(cls) -> MatchResult:
        return cls(tracked=False)
