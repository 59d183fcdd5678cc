# -*- coding: utf-8 -*-
"""Match policy: which payloads count as tracked payments and how order ids are extracted."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payment_webhook_watcher.config import ChainName, MatcherSettings


@dataclass(frozen=True, slots=True)
class MatchPolicy:
    """Marker and order-id rule for one chain.

    The order id is the first capture group of ``order_pattern``; markers and
    pattern share the same case sensitivity.
    """

    markers: tuple[str, ...]
    order_pattern: str
    case_sensitive: bool = False
    inbound_only: bool = False
    """Only consider transactions whose recipient is the watched address."""
    message_separator: str = " | "

    def __post_init__(self) -> None:
        if not self.markers:
            raise ValueError("markers must be non-empty")
        compiled = re.compile(self.order_pattern)
        if compiled.groups < 1:
            raise ValueError("order_pattern must contain a capture group")

    @property
    def regex(self) -> re.Pattern[str]:
        flags = 0 if self.case_sensitive else re.IGNORECASE
        return re.compile(self.order_pattern, flags)

    @classmethod
    def for_chain(cls, chain: ChainName) -> MatchPolicy:
        """Built-in policy for a chain's payment-order messages."""
        if chain == "ethereum":
            return cls(
                markers=("Order:", "jet-accept.com"),
                order_pattern=r"Order: ([^:]+)",
                inbound_only=True,
            )
        return cls(
            markers=("jet-accept",),
            order_pattern=r"Jet-accept\.com #([^:|]+)",
            inbound_only=False,
        )

    def with_overrides(self, overrides: MatcherSettings) -> MatchPolicy:
        """Apply MATCHER__* settings on top of this policy."""
        policy = self
        if overrides.markers:
            policy = replace(policy, markers=tuple(overrides.markers))
        if overrides.order_pattern:
            policy = replace(policy, order_pattern=overrides.order_pattern)
        if overrides.case_sensitive is not None:
            policy = replace(policy, case_sensitive=overrides.case_sensitive)
        if overrides.inbound_only is not None:
            policy = replace(policy, inbound_only=overrides.inbound_only)
        return policy
