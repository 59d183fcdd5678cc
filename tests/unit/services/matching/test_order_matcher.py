# -*- coding: utf-8 -*-
"""Unit tests for OrderMatcher with the built-in TON and Ethereum policies."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from payment_webhook_watcher.models.match_result import MatchResult
from payment_webhook_watcher.models.transaction import Transaction
from payment_webhook_watcher.services.matching import MatchPolicy, OrderMatcher


@pytest.fixture
def ton_matcher() -> OrderMatcher:
    return OrderMatcher(MatchPolicy.for_chain("ton"))


@pytest.fixture
def eth_matcher() -> OrderMatcher:
    return OrderMatcher(MatchPolicy.for_chain("ethereum"))


# ---------------------------------------------------------------------------
# TON: text payloads on in/out message legs, no direction filter
# ---------------------------------------------------------------------------


def test_ton_no_payload_is_not_tracked(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    assert ton_matcher.match(tx_factory(payloads=())) == MatchResult.not_tracked()


def test_ton_empty_payload_is_not_tracked(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    assert ton_matcher.match(tx_factory(payloads=("",))).tracked is False


def test_ton_marker_is_case_insensitive_and_extracts_order(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    result = ton_matcher.match(tx_factory(payloads=("JET-ACCEPT.COM #ORD-77",)))
    assert result == MatchResult(tracked=True, order_id="ORD-77")


def test_ton_order_id_stops_at_colon_and_is_trimmed(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    result = ton_matcher.match(tx_factory(payloads=("Jet-accept.com # 123 :extra",)))
    assert result.order_id == "123"


def test_ton_marker_in_out_message_leg_counts(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    result = ton_matcher.match(
        tx_factory(payloads=("thanks", "Jet-accept.com #55"))
    )
    assert result == MatchResult(tracked=True, order_id="55")


def test_ton_order_id_does_not_run_into_next_leg(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    result = ton_matcher.match(
        tx_factory(payloads=("Jet-accept.com #55", "refund note"))
    )
    assert result.order_id == "55"


def test_ton_marker_without_order_is_tracked_with_null_id(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    result = ton_matcher.match(tx_factory(payloads=("paid via jet-accept",)))
    assert result == MatchResult(tracked=True, order_id=None)


def test_ton_unrelated_message_is_not_tracked(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    assert ton_matcher.match(tx_factory(payloads=("hello",))).tracked is False


def test_ton_ignores_direction(
    ton_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    tx = tx_factory(payloads=("Jet-accept.com #1",), is_inbound=False)
    assert ton_matcher.match(tx).tracked is True


# ---------------------------------------------------------------------------
# Ethereum: hex input data, inbound transfers only
# ---------------------------------------------------------------------------


def test_eth_inbound_order_is_tracked(
    eth_matcher: OrderMatcher,
    tx_factory: Callable[..., Transaction],
    hex_payload: Callable[[str], str],
) -> None:
    tx = tx_factory(
        payloads=(hex_payload("Order: 123"),), payload_encoding="hex", is_inbound=True
    )
    assert eth_matcher.match(tx) == MatchResult(tracked=True, order_id="123")


def test_eth_outbound_is_not_tracked(
    eth_matcher: OrderMatcher,
    tx_factory: Callable[..., Transaction],
    hex_payload: Callable[[str], str],
) -> None:
    tx = tx_factory(
        payloads=(hex_payload("Order: 123"),), payload_encoding="hex", is_inbound=False
    )
    assert eth_matcher.match(tx).tracked is False


def test_eth_unknown_direction_is_not_tracked(
    eth_matcher: OrderMatcher,
    tx_factory: Callable[..., Transaction],
    hex_payload: Callable[[str], str],
) -> None:
    tx = tx_factory(payloads=(hex_payload("Order: 123"),), payload_encoding="hex")
    assert eth_matcher.match(tx).tracked is False


def test_eth_domain_marker_without_order_prefix(
    eth_matcher: OrderMatcher,
    tx_factory: Callable[..., Transaction],
    hex_payload: Callable[[str], str],
) -> None:
    tx = tx_factory(
        payloads=(hex_payload("paid at jet-accept.com"),),
        payload_encoding="hex",
        is_inbound=True,
    )
    assert eth_matcher.match(tx) == MatchResult(tracked=True, order_id=None)


def test_eth_undecodable_input_is_not_tracked(
    eth_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    tx = tx_factory(payloads=("0xa9b9ff",), payload_encoding="hex", is_inbound=True)
    assert eth_matcher.match(tx) == MatchResult.not_tracked()


def test_eth_contract_call_data_is_not_tracked(
    eth_matcher: OrderMatcher, tx_factory: Callable[..., Transaction]
) -> None:
    tx = tx_factory(
        payloads=("0xa9059cbb000000000000000000000000",), payload_encoding="hex", is_inbound=True
    )
    assert eth_matcher.match(tx).tracked is False


def test_eth_order_id_extraction_is_deterministic(
    eth_matcher: OrderMatcher,
    tx_factory: Callable[..., Transaction],
    hex_payload: Callable[[str], str],
) -> None:
    tx = tx_factory(
        payloads=(hex_payload("Order:  A-9  :memo"),), payload_encoding="hex", is_inbound=True
    )
    first = eth_matcher.match(tx)
    assert first == eth_matcher.match(tx)
    assert first.order_id == "A-9"


# ---------------------------------------------------------------------------
# Custom policies
# ---------------------------------------------------------------------------


def test_case_sensitive_policy_rejects_other_case(
    tx_factory: Callable[..., Transaction],
) -> None:
    matcher = OrderMatcher(
        MatchPolicy(markers=("Order:",), order_pattern=r"Order: (\w+)", case_sensitive=True)
    )
    assert matcher.match(tx_factory(payloads=("order: 1",))).tracked is False
    assert matcher.match(tx_factory(payloads=("Order: 1",))).order_id == "1"


def test_whitespace_only_capture_yields_null_order_id(
    tx_factory: Callable[..., Transaction],
) -> None:
    matcher = OrderMatcher(MatchPolicy(markers=("ref",), order_pattern=r"ref=([^;]*)"))
    assert matcher.match(tx_factory(payloads=("ref=   ;",))) == MatchResult(
        tracked=True, order_id=None
    )
