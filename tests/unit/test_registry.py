"""Tests for LiquidityRegistry."""

import pytest

from cfmm.registry import LiquidityRegistry

PAIR = (0, 1)
OTHER_PAIR = (0, 2)


@pytest.fixture
def registry() -> LiquidityRegistry:
    return LiquidityRegistry()


class TestSparseStorage:
    def test_absent_entries_read_as_zero(self, registry):
        assert registry.get_total(PAIR) == 0
        assert registry.get_account("alice", PAIR) == 0

    def test_set_and_get(self, registry):
        registry.set_total(PAIR, 300)
        registry.set_account("alice", PAIR, 300)
        assert registry.get_total(PAIR) == 300
        assert registry.get_account("alice", PAIR) == 300

    def test_zero_removes_entries(self, registry):
        registry.set_total(PAIR, 300)
        registry.set_account("alice", PAIR, 300)
        registry.set_total(PAIR, 0)
        registry.set_account("alice", PAIR, 0)
        assert registry.pairs() == []
        assert registry.liquidity_of("alice") == {}

    def test_setting_absent_entry_to_zero_is_noop(self, registry):
        registry.set_total(PAIR, 0)
        registry.set_account("alice", PAIR, 0)
        assert registry.pairs() == []

    def test_negative_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.set_total(PAIR, -1)
        with pytest.raises(ValueError):
            registry.set_account("alice", PAIR, -1)


class TestQueries:
    def test_accounts_for_pair(self, registry):
        registry.set_account("alice", PAIR, 10)
        registry.set_account("bob", PAIR, 20)
        registry.set_account("bob", OTHER_PAIR, 5)
        assert registry.accounts_for_pair(PAIR) == {"alice": 10, "bob": 20}

    def test_liquidity_of(self, registry):
        registry.set_account("bob", PAIR, 20)
        registry.set_account("bob", OTHER_PAIR, 5)
        assert registry.liquidity_of("bob") == {PAIR: 20, OTHER_PAIR: 5}

    def test_is_conserved(self, registry):
        registry.set_total(PAIR, 30)
        registry.set_account("alice", PAIR, 10)
        assert not registry.is_conserved(PAIR)
        registry.set_account("bob", PAIR, 20)
        assert registry.is_conserved(PAIR)


class TestSnapshot:
    def test_restore_discards_later_writes(self, registry):
        registry.set_total(PAIR, 30)
        registry.set_account("alice", PAIR, 30)
        snapshot = registry.snapshot()

        registry.set_total(PAIR, 0)
        registry.set_account("alice", PAIR, 0)
        registry.set_total(OTHER_PAIR, 7)

        registry.restore(snapshot)
        assert registry.get_total(PAIR) == 30
        assert registry.get_account("alice", PAIR) == 30
        assert registry.get_total(OTHER_PAIR) == 0

    def test_snapshot_is_independent_copy(self, registry):
        snapshot = registry.snapshot()
        registry.set_total(PAIR, 1)
        assert snapshot.totals == {}
