"""Order matcher: decides whether a transaction is a tracked payment."""

from __future__ import annotations

from payment_webhook_watcher.exceptions import PayloadDecodeError
from payment_webhook_watcher.models.match_result import MatchResult
from payment_webhook_watcher.models.transaction import Transaction
from payment_webhook_watcher.services.matching.payload import decode_payload
from payment_webhook_watcher.services.matching.policy import MatchPolicy


class OrderMatcher:
    """Pure, side-effect-free matcher. Malformed payloads are "not tracked", never errors."""

    def __init__(self, policy: MatchPolicy) -> None:
        self._policy = policy
        self._regex = policy.regex
        if policy.case_sensitive:
            self._markers = policy.markers
        else:
            self._markers = tuple(m.lower() for m in policy.markers)

    @property
    def policy(self) -> MatchPolicy:
        return self._policy

    def message_text(self, tx: Transaction) -> str | None:
        """Decoded payload legs joined with the policy separator, or None if undecodable."""
        texts: list[str] = []
        for raw in tx.payloads:
            if not raw:
                continue
            try:
                text = decode_payload(raw, tx.payload_encoding)
            except PayloadDecodeError:
                return None
            if text:
                texts.append(text)
        return self._policy.message_separator.join(texts)

    def match(self, tx: Transaction) -> MatchResult:
        """Return tracked + order id when the payload carries a marker."""
        if self._policy.inbound_only and tx.is_inbound is not True:
            return MatchResult.not_tracked()

        text = self.message_text(tx)
        if not text:
            return MatchResult.not_tracked()

        haystack = text if self._policy.case_sensitive else text.lower()
        if not any(marker in haystack for marker in self._markers):
            return MatchResult.not_tracked()

        found = self._regex.search(text)
        order_id = found.group(1).strip() if found and found.group(1) else None
        return MatchResult(tracked=True, order_id=order_id or None)
