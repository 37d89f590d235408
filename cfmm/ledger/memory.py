"""In-memory asset ledger.

Reference implementation of TransactionalLedger used by the dispatch API and
the test suite. Every asset has a minimum balance: an account holds either
nothing or at least that much. Transfers that would leave the source with a
non-zero balance below the minimum sweep the remainder to the destination
instead of burning it.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from cfmm.errors import BalanceLow, BelowMinimum, UnknownAsset
from cfmm.pairs import AccountId, AssetId
from cfmm.safe_int import add, sub

logger = structlog.get_logger()


@dataclass(frozen=True)
class LedgerSnapshot:
    """Copy of the ledger's balances and asset table."""

    min_balances: dict[AssetId, int]
    balances: dict[tuple[AssetId, AccountId], int]


class InMemoryAssetLedger:
    """Dict-backed fungible asset ledger with minimum-balance semantics."""

    def __init__(self) -> None:
        self._min_balances: dict[AssetId, int] = {}
        # Sparse: zero balances are removed
        self._balances: dict[tuple[AssetId, AccountId], int] = {}

    # --- Administration ---

    def create_asset(self, asset: AssetId, min_balance: int) -> None:
        """Register a new asset.

        Raises:
            ValueError: If the asset already exists or min_balance is not positive
        """
        if asset in self._min_balances:
            raise ValueError(f"Asset {asset!r} already exists")
        if min_balance <= 0:
            raise ValueError(f"Minimum balance must be positive: {min_balance}")
        self._min_balances[asset] = min_balance
        logger.debug("asset_created", asset=asset, min_balance=min_balance)

    def mint(self, asset: AssetId, account: AccountId, amount: int) -> None:
        """Create amount of asset in account.

        Raises:
            UnknownAsset: If the asset does not exist
            BelowMinimum: If the resulting balance would be below the minimum
        """
        min_balance = self.minimum_balance(asset)
        new_balance = add(self.balance_of(asset, account), amount)
        if 0 < new_balance < min_balance:
            raise BelowMinimum(
                f"Minting {amount} of {asset!r} leaves {account} below minimum {min_balance}"
            )
        self._set(asset, account, new_balance)

    def assets(self) -> list[AssetId]:
        return list(self._min_balances)

    # --- AssetLedger ---

    def balance_of(self, asset: AssetId, account: AccountId) -> int:
        return self._balances.get((asset, account), 0)

    def minimum_balance(self, asset: AssetId) -> int:
        try:
            return self._min_balances[asset]
        except KeyError:
            raise UnknownAsset(f"Unknown asset: {asset!r}") from None

    def reducible_balance(self, asset: AssetId, account: AccountId, keep_alive: bool) -> int:
        if asset not in self._min_balances:
            return 0
        balance = self.balance_of(asset, account)
        if keep_alive:
            return max(balance - self._min_balances[asset], 0)
        return balance

    def transfer(
        self,
        asset: AssetId,
        source: AccountId,
        dest: AccountId,
        amount: int,
        keep_alive: bool,
    ) -> int:
        """Move assets between accounts, returning the amount actually moved.

        Raises:
            UnknownAsset: If the asset does not exist
            BalanceLow: If source cannot cover amount, or would be reaped
                despite keep_alive
            BelowMinimum: If dest holds nothing and would receive less than
                the minimum balance
        """
        min_balance = self.minimum_balance(asset)
        if amount == 0:
            return 0

        source_balance = self.balance_of(asset, source)
        if source_balance < amount:
            raise BalanceLow(
                f"{source} holds {source_balance} of {asset!r}, cannot transfer {amount}"
            )
        remainder = sub(source_balance, amount)
        if keep_alive and remainder < min_balance:
            raise BalanceLow(
                f"Transfer of {amount} {asset!r} would reap {source} (keep_alive)"
            )
        if 0 < remainder < min_balance:
            logger.debug(
                "dust_swept",
                asset=asset,
                source=source,
                requested=amount,
                dust=remainder,
            )
            amount = source_balance
            remainder = 0

        if source == dest:
            return amount

        dest_balance = self.balance_of(asset, dest)
        if dest_balance == 0 and amount < min_balance:
            raise BelowMinimum(
                f"Transfer of {amount} {asset!r} to new account {dest} is below minimum {min_balance}"
            )

        self._set(asset, source, remainder)
        self._set(asset, dest, add(dest_balance, amount))
        return amount

    # --- TransactionalLedger ---

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(min_balances=dict(self._min_balances), balances=dict(self._balances))

    def restore(self, snapshot: LedgerSnapshot) -> None:
        self._min_balances = dict(snapshot.min_balances)
        self._balances = dict(snapshot.balances)

    def _set(self, asset: AssetId, account: AccountId, value: int) -> None:
        if value == 0:
            self._balances.pop((asset, account), None)
        else:
            self._balances[(asset, account)] = value


__all__ = ["InMemoryAssetLedger", "LedgerSnapshot"]
