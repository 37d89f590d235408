"""Add liquidity to a pool.

The first provider for a pair deposits both maximum amounts in full and sets
the exchange rate. Later providers deposit an equivalent value of each asset
at the current rate, sized by whichever of their maximums is scarcer.
"""

from __future__ import annotations

import structlog

from cfmm.errors import UnexpectedExchangeRate
from cfmm.events import AddLiquidityResult, LiquidityAdded
from cfmm.operations.base import OperationContext
from cfmm.pairs import AccountId, AssetId, make_asset_pair
from cfmm.safe_int import add, mul_div_ceil, mul_div_floor, mul_wide, saturating_mul

logger = structlog.get_logger()


def compute_join(
    max_amount_a: int,
    max_amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_liquidity: int,
    initial_liquidity_per_asset_unit: int,
) -> tuple[int, int, int]:
    """Claims to mint and amounts to deposit for a join.

    Claims are rounded down and amounts rounded up, so the joining account
    never pays less than its fair share of the pool.

    Args:
        max_amount_a: Most of asset A the caller will deposit
        max_amount_b: Most of asset B the caller will deposit
        reserve_a: Pool balance of asset A
        reserve_b: Pool balance of asset B
        total_liquidity: Claims outstanding for the pair
        initial_liquidity_per_asset_unit: Seed multiplier for the first provider

    Returns:
        Tuple of (minted_claims, amount_a, amount_b)

    Raises:
        DivisionByZero: If claims exist but the scarcer side's reserve is empty
        Overflow: If an intermediate result does not fit in a balance
    """
    if total_liquidity == 0:
        minted = saturating_mul(max(max_amount_a, max_amount_b), initial_liquidity_per_asset_unit)
        return minted, max_amount_a, max_amount_b

    # Cross-multiply to find which maximum is worth less at the current rate
    if mul_wide(max_amount_a, reserve_b) < mul_wide(max_amount_b, reserve_a):
        minted = mul_div_floor(max_amount_a, total_liquidity, reserve_a)
    else:
        minted = mul_div_floor(max_amount_b, total_liquidity, reserve_b)

    amount_a = mul_div_ceil(minted, reserve_a, total_liquidity)
    amount_b = mul_div_ceil(minted, reserve_b, total_liquidity)
    return minted, amount_a, amount_b


def add_liquidity(
    ctx: OperationContext,
    who: AccountId,
    asset_a: AssetId,
    min_amount_a: int,
    max_amount_a: int,
    asset_b: AssetId,
    min_amount_b: int,
    max_amount_b: int,
) -> tuple[AddLiquidityResult, LiquidityAdded]:
    """Deposit both assets of a pair and mint claims to the sender.

    Must run inside a transaction: on error, transfers and registry writes
    already made by this call are not undone here.

    Raises:
        AssetsIdentical: If asset_a == asset_b
        UnexpectedExchangeRate: If either amount is below its minimum
        InsufficientPoolAmount: If the sender's resulting share is too small
        LedgerError: If the ledger rejects a transfer
        SafeIntError: On arithmetic failure
    """
    pair = make_asset_pair(asset_a, asset_b)
    pool_account = ctx.pool_account(pair)
    total_liquidity = ctx.registry.get_total(pair)
    reserve_a, reserve_b = ctx.reserves(pool_account, asset_a, asset_b)

    minted, amount_a, amount_b = compute_join(
        max_amount_a,
        max_amount_b,
        reserve_a,
        reserve_b,
        total_liquidity,
        ctx.config.initial_liquidity_per_asset_unit,
    )

    if amount_a < min_amount_a or amount_b < min_amount_b:
        raise UnexpectedExchangeRate(
            f"Join amounts ({amount_a}, {amount_b}) below minimums ({min_amount_a}, {min_amount_b})"
        )

    # The ledger may take more than requested to avoid leaving dust in the
    # sender's account; the actual amounts are what get recorded
    amount_a = ctx.ledger.transfer(asset_a, who, pool_account, amount_a, False)
    reserve_a = add(reserve_a, amount_a)
    amount_b = ctx.ledger.transfer(asset_b, who, pool_account, amount_b, False)
    reserve_b = add(reserve_b, amount_b)

    total_liquidity = add(total_liquidity, minted)
    ctx.registry.set_total(pair, total_liquidity)
    sender_liquidity = add(ctx.registry.get_account(who, pair), minted)
    ctx.registry.set_account(who, pair, sender_liquidity)

    ctx.guard.check_account_share(reserve_a, sender_liquidity, total_liquidity, asset_a)
    ctx.guard.check_account_share(reserve_b, sender_liquidity, total_liquidity, asset_b)

    logger.debug(
        "liquidity_added",
        who=who,
        pair=pair,
        amount_a=amount_a,
        amount_b=amount_b,
        minted=minted,
        total_liquidity=total_liquidity,
    )
    event = LiquidityAdded(
        who=who,
        asset_a=asset_a,
        amount_a=amount_a,
        asset_b=asset_b,
        amount_b=amount_b,
        liquidity=minted,
    )
    return AddLiquidityResult(amount_a=amount_a, amount_b=amount_b, minted_claims=minted), event


__all__ = ["compute_join", "add_liquidity"]
