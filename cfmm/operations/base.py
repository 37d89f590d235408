"""Shared state handed to every pool operation."""

from __future__ import annotations

from dataclasses import dataclass, field

from cfmm.config import CfmmConfig
from cfmm.guard import MinPoolAmountGuard
from cfmm.ledger.base import AssetLedger
from cfmm.pairs import AccountId, AssetId, AssetPair, derive_pool_account
from cfmm.registry import LiquidityRegistry


@dataclass
class OperationContext:
    """Collaborators an operation reads from and writes to."""

    registry: LiquidityRegistry
    ledger: AssetLedger
    config: CfmmConfig
    guard: MinPoolAmountGuard = field(init=False)

    def __post_init__(self) -> None:
        self.guard = MinPoolAmountGuard(self.ledger, self.config.pool_min_amount_multiple)

    def pool_account(self, pair: AssetPair) -> AccountId:
        return derive_pool_account(pair, self.config.pallet_id)

    def reserves(self, pool_account: AccountId, asset_a: AssetId, asset_b: AssetId) -> tuple[int, int]:
        """Pool balances of both assets, in the order requested."""
        return (
            self.ledger.balance_of(asset_a, pool_account),
            self.ledger.balance_of(asset_b, pool_account),
        )
