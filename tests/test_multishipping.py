# tests/test_multishipping.py
# Multishipping reservation tests

import asyncio

import pytest

from app.schemas.acquired import SessionRequest, SessionTransaction
from app.services.multishipping_service import (
    MultishippingService,
    RedisOrderIdSequence,
    apply_multishipping,
    is_multishipping_order_id,
    split_multishipping_order_ids,
)
from tests.conftest import FakeCart, FakeOrderIdSequence


class FakeRedis:
    def __init__(self):
        self.counters = {}

    async def incrby(self, key, amount):
        self.counters[key] = self.counters.get(key, 0) + amount
        return self.counters[key]


class TestRedisOrderIdSequence:
    """Redis backed increment ids"""

    def test_reserves_contiguous_block(self):
        sequence = RedisOrderIdSequence(redis=FakeRedis(), prefix="", pad=9)

        first = asyncio.run(sequence.reserve(3))
        second = asyncio.run(sequence.reserve(2))

        assert first == ["000000001", "000000002", "000000003"]
        assert second == ["000000004", "000000005"]

    def test_prefix(self):
        sequence = RedisOrderIdSequence(redis=FakeRedis(), prefix="EU", pad=4)
        assert asyncio.run(sequence.reserve(1)) == ["EU0001"]

    def test_zero_count_rejected(self):
        sequence = RedisOrderIdSequence(redis=FakeRedis(), prefix="", pad=9)
        with pytest.raises(ValueError):
            asyncio.run(sequence.reserve(0))


class TestMultishippingService:
    """Order id reservation for a split cart"""

    def test_one_id_per_address(self):
        cart = FakeCart(multi_shipping=True, addresses=3)
        ids = asyncio.run(MultishippingService(FakeOrderIdSequence(500)).reserve_order_ids(cart))

        assert ids == ["000000500", "000000501", "000000502"]
        assert cart.reserved_order_ids == ids

    def test_at_least_one_id(self):
        cart = FakeCart(multi_shipping=True, addresses=0)
        ids = asyncio.run(MultishippingService(FakeOrderIdSequence()).reserve_order_ids(cart))
        assert len(ids) == 1


class TestApplyMultishipping:
    """Synthetic aggregate order id"""

    def test_rewrites_transaction(self):
        payload = SessionRequest(
            transaction=SessionTransaction(
                order_id="X", amount="10.00", currency="usd", capture=True
            )
        )

        apply_multishipping(payload, ["A", "B", "C"])

        assert payload.transaction.order_id == "A-ACQM"
        assert payload.transaction.custom2 == "A,B,C"
        assert payload.transaction.custom1 == "multishipping order"
        assert payload.transaction.capture is False

    def test_reconciliation_helpers(self):
        assert is_multishipping_order_id("A-ACQM")
        assert not is_multishipping_order_id("A")
        assert not is_multishipping_order_id(None)
        assert split_multishipping_order_ids("A, B,C") == ["A", "B", "C"]
        assert split_multishipping_order_ids(None) == []
