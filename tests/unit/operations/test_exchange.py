"""Tests for exchanges and quotes."""

import pytest

from cfmm.config import Permill
from cfmm.errors import AssetsIdentical, BalanceLow, NoLiquidity, UnexpectedExchangeRate
from cfmm.events import Exchanged
from cfmm.operations import get_amount_out
from tests.helpers import ALICE, ASSET_0, ASSET_1, ASSET_2, BOB, make_engine, make_ledger

TEN_PERCENT = Permill(100_000)


class TestGetAmountOut:
    def test_ten_percent_fee(self):
        # fee = 2, new_out = ceil(5000 * 10000 / 5018) = 9965
        assert get_amount_out(20, 5_000, 10_000, TEN_PERCENT) == 35

    def test_zero_fee(self):
        assert get_amount_out(1_000, 1_000, 1_000, Permill.zero()) == 500

    def test_zero_amount(self):
        assert get_amount_out(0, 5_000, 10_000, TEN_PERCENT) == 0

    def test_never_drains_pool(self):
        assert get_amount_out(10**30, 5_000, 10_000, TEN_PERCENT) < 10_000

    @pytest.mark.parametrize("reserve_in,reserve_out", [(0, 10_000), (5_000, 0), (0, 0)])
    def test_empty_reserves(self, reserve_in, reserve_out):
        with pytest.raises(NoLiquidity):
            get_amount_out(20, reserve_in, reserve_out, TEN_PERCENT)


class TestExchange:
    @pytest.fixture
    def pooled(self):
        ledger = make_ledger(balance=20_000)
        engine = make_engine(ledger)
        engine.add_liquidity(ALICE, ASSET_0, 0, 5_000, ASSET_1, 0, 10_000)
        engine.take_events()
        return engine

    def test_exchange(self, pooled):
        result = pooled.exchange(BOB, ASSET_0, 20, ASSET_1, 0)

        assert (result.source_amount, result.dest_amount) == (20, 35)
        assert pooled.get_exchange_rate(ASSET_0, ASSET_1) == (5_020, 9_965)
        assert pooled.ledger.balance_of(ASSET_0, BOB) == 19_980
        assert pooled.ledger.balance_of(ASSET_1, BOB) == 20_035
        assert pooled.events == [
            Exchanged(
                who=BOB,
                source_asset=ASSET_0,
                source_amount=20,
                dest_asset=ASSET_1,
                dest_amount=35,
            )
        ]

    def test_claims_untouched(self, pooled):
        pooled.exchange(BOB, ASSET_0, 20, ASSET_1, 0)
        assert pooled.total_liquidity(ASSET_0, ASSET_1) == 100_000
        assert pooled.liquidity_of(BOB, ASSET_0, ASSET_1) == 0

    def test_unexpected_exchange_rate(self, pooled):
        with pytest.raises(UnexpectedExchangeRate):
            pooled.exchange(BOB, ASSET_0, 20, ASSET_1, 36)

        assert pooled.get_exchange_rate(ASSET_0, ASSET_1) == (5_000, 10_000)
        assert pooled.ledger.balance_of(ASSET_0, BOB) == 20_000
        assert pooled.events == []

    def test_minimum_met_exactly(self, pooled):
        assert pooled.exchange(BOB, ASSET_0, 20, ASSET_1, 35).dest_amount == 35

    def test_product_never_decreases(self, pooled):
        for source, dest, amount in [(ASSET_0, ASSET_1, 20), (ASSET_1, ASSET_0, 777), (ASSET_0, ASSET_1, 3)]:
            before_src, before_dst = pooled.get_exchange_rate(source, dest)
            pooled.exchange(BOB, source, amount, dest, 0)
            after_src, after_dst = pooled.get_exchange_rate(source, dest)
            assert after_src * after_dst >= before_src * before_dst

    def test_round_trip_loses_value(self, pooled):
        received = pooled.exchange(BOB, ASSET_0, 20, ASSET_1, 0).dest_amount
        returned = pooled.exchange(BOB, ASSET_1, received, ASSET_0, 0).dest_amount
        assert returned <= 20

    def test_no_liquidity(self, pooled):
        with pytest.raises(NoLiquidity):
            pooled.exchange(BOB, ASSET_0, 20, ASSET_2, 0)

    def test_identical_assets(self, pooled):
        with pytest.raises(AssetsIdentical):
            pooled.exchange(BOB, ASSET_0, 20, ASSET_0, 0)

    def test_sender_cannot_cover_source(self, pooled):
        with pytest.raises(BalanceLow):
            pooled.exchange(BOB, ASSET_0, 20_001, ASSET_1, 0)
        assert pooled.get_exchange_rate(ASSET_0, ASSET_1) == (5_000, 10_000)


class TestQuote:
    def test_matches_exchange(self, engine):
        engine.add_liquidity(ALICE, ASSET_0, 0, 1_000, ASSET_1, 0, 2_000)
        quoted = engine.quote_exchange(ASSET_0, 100, ASSET_1)
        assert engine.exchange(BOB, ASSET_0, 100, ASSET_1, 0).dest_amount == quoted

    def test_read_only(self, engine):
        engine.add_liquidity(ALICE, ASSET_0, 0, 1_000, ASSET_1, 0, 2_000)
        engine.take_events()
        engine.quote_exchange(ASSET_0, 100, ASSET_1)
        assert engine.get_exchange_rate(ASSET_0, ASSET_1) == (1_000, 2_000)
        assert engine.events == []

    def test_capped_by_pool_reducible_balance(self, engine):
        """The pool keeps its minimum balance of the destination asset."""
        engine.add_liquidity(ALICE, ASSET_0, 0, 100, ASSET_1, 0, 200)
        # Uncapped: 200 - ceil(100 * 200 / 8200) = 197; reducible is 200 - 20
        assert engine.quote_exchange(ASSET_0, 9_000, ASSET_1) == 180

        engine.exchange(BOB, ASSET_0, 9_000, ASSET_1, 0)
        assert engine.get_exchange_rate(ASSET_0, ASSET_1) == (9_100, 20)

    def test_empty_pool(self, engine):
        with pytest.raises(NoLiquidity):
            engine.quote_exchange(ASSET_0, 100, ASSET_1)
