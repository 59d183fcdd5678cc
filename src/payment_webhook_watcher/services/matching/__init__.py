"""Order matching services."""

from payment_webhook_watcher.services.matching.order_matcher import OrderMatcher
from payment_webhook_watcher.services.matching.payload import decode_payload
from payment_webhook_watcher.services.matching.policy import MatchPolicy

__all__ = ["MatchPolicy", "OrderMatcher", "decode_payload"]
