"""Anti-griefing floor on liquidity positions.

When adding or removing liquidity, the amount of each asset effectively owned
by the sender must be at least a multiple of the asset's minimum balance.
Otherwise someone could seed a near-empty pool at a bogus exchange rate with
a position too small for arbitrage to correct profitably.

Positions may still drift below the floor as exchanges happen; the check only
runs when the owner changes their own position.
"""

from __future__ import annotations

import structlog

from cfmm.errors import InsufficientPoolAmount
from cfmm.ledger.base import AssetLedger
from cfmm.pairs import AssetId
from cfmm.safe_int import checked_mul, mul_div_floor

logger = structlog.get_logger()


class MinPoolAmountGuard:
    """Enforces the per-asset minimum effective pool share."""

    def __init__(self, ledger: AssetLedger, pool_min_amount_multiple: int) -> None:
        self.ledger = ledger
        self.pool_min_amount_multiple = pool_min_amount_multiple

    def min_pool_amount(self, asset: AssetId) -> int:
        """Ledger minimum balance times the configured multiple.

        Raises:
            Overflow: If the product exceeds the balance width
        """
        return checked_mul(self.ledger.minimum_balance(asset), self.pool_min_amount_multiple)

    def check_account_share(
        self,
        reserve: int,
        account_claims: int,
        total_claims: int,
        asset: AssetId,
    ) -> None:
        """Require floor(reserve * account_claims / total_claims) >= min_pool_amount.

        Raises:
            InsufficientPoolAmount: If the share is below the floor
            DivisionByZero: If no claims are outstanding
        """
        share = mul_div_floor(reserve, account_claims, total_claims)
        minimum = self.min_pool_amount(asset)
        if share < minimum:
            logger.debug(
                "pool_share_below_minimum",
                asset=asset,
                share=share,
                minimum=minimum,
            )
            raise InsufficientPoolAmount(
                f"Effective share {share} of asset {asset!r} is below minimum {minimum}"
            )


__all__ = ["MinPoolAmountGuard"]
