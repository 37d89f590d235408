"""Liquidity claim registry.

Tracks, per canonical asset pair, the total number of claim tokens handed out
and the number held by each account. Both maps are sparse: a zero balance is
never stored, so absence and zero are equivalent.

The registry does no validation beyond the sparse-zero rule. Conservation
(sum of account claims == total claims) is maintained by the operations that
write to it.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from cfmm.pairs import AccountId, AssetPair

logger = structlog.get_logger()


@dataclass(frozen=True)
class RegistrySnapshot:
    """Point-in-time copy of the registry, used to roll back an operation."""

    totals: dict[AssetPair, int]
    accounts: dict[tuple[AccountId, AssetPair], int]


class LiquidityRegistry:
    """Sparse storage of total and per-account liquidity claims."""

    def __init__(self) -> None:
        self._totals: dict[AssetPair, int] = {}
        # Keyed by (account, pair) so one account's positions can be listed together
        self._accounts: dict[tuple[AccountId, AssetPair], int] = {}

    def get_total(self, pair: AssetPair) -> int:
        """Total claims outstanding for a pair (0 if absent)."""
        return self._totals.get(pair, 0)

    def get_account(self, account: AccountId, pair: AssetPair) -> int:
        """Claims held by an account for a pair (0 if absent)."""
        return self._accounts.get((account, pair), 0)

    def set_total(self, pair: AssetPair, value: int) -> None:
        """Set the total for a pair, removing the entry when value is 0.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError(f"Total liquidity cannot be negative: {value}")
        if value == 0:
            if self._totals.pop(pair, None) is not None:
                logger.debug("total_liquidity_removed", pair=pair)
        else:
            self._totals[pair] = value

    def set_account(self, account: AccountId, pair: AssetPair, value: int) -> None:
        """Set an account's claims for a pair, removing the entry when value is 0.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError(f"Account liquidity cannot be negative: {value}")
        if value == 0:
            self._accounts.pop((account, pair), None)
        else:
            self._accounts[(account, pair)] = value

    def pairs(self) -> list[AssetPair]:
        """Pairs with outstanding claims."""
        return list(self._totals)

    def accounts_for_pair(self, pair: AssetPair) -> dict[AccountId, int]:
        """All holders of claims for a pair."""
        return {
            account: value for (account, entry_pair), value in self._accounts.items()
            if entry_pair == pair
        }

    def liquidity_of(self, account: AccountId) -> dict[AssetPair, int]:
        """All positions held by an account."""
        return {
            pair: value for (entry_account, pair), value in self._accounts.items()
            if entry_account == account
        }

    def is_conserved(self, pair: AssetPair) -> bool:
        """True if account claims for the pair sum to the pair's total."""
        return sum(self.accounts_for_pair(pair).values()) == self.get_total(pair)

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(totals=dict(self._totals), accounts=dict(self._accounts))

    def restore(self, snapshot: RegistrySnapshot) -> None:
        """Replace the registry contents with a previous snapshot."""
        self._totals = dict(snapshot.totals)
        self._accounts = dict(snapshot.accounts)


__all__ = ["LiquidityRegistry", "RegistrySnapshot"]
