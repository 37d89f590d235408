"""Redeem liquidity claims for the underlying pool assets."""

from __future__ import annotations

import structlog

from cfmm.events import LiquidityRemoved, RemoveLiquidityResult
from cfmm.operations.base import OperationContext
from cfmm.pairs import AccountId, AssetId, make_asset_pair
from cfmm.safe_int import mul_div_floor, sub

logger = structlog.get_logger()


def compute_withdrawal(
    liquidity: int,
    reserve_a: int,
    reserve_b: int,
    total_liquidity: int,
) -> tuple[int, int]:
    """Pro-rata share of both reserves for a number of claims, rounded down.

    Raises:
        DivisionByZero: If no claims are outstanding
    """
    amount_a = mul_div_floor(liquidity, reserve_a, total_liquidity)
    amount_b = mul_div_floor(liquidity, reserve_b, total_liquidity)
    return amount_a, amount_b


def remove_liquidity(
    ctx: OperationContext,
    who: AccountId,
    asset_a: AssetId,
    asset_b: AssetId,
    liquidity: int,
) -> tuple[RemoveLiquidityResult, LiquidityRemoved]:
    """Burn claims and pay the sender their share of the pool.

    No exchange-rate check is offered: rounding always favours the pool, and
    the sender benefits from any deviation in the rate itself.

    Must run inside a transaction.

    Raises:
        AssetsIdentical: If asset_a == asset_b
        Underflow: If the sender or pool holds fewer claims than liquidity
        InsufficientPoolAmount: If a partial exit leaves too small a share
        LedgerError: If the ledger rejects a transfer
    """
    pair = make_asset_pair(asset_a, asset_b)
    pool_account = ctx.pool_account(pair)
    total_liquidity = ctx.registry.get_total(pair)
    reserve_a, reserve_b = ctx.reserves(pool_account, asset_a, asset_b)

    amount_a, amount_b = compute_withdrawal(liquidity, reserve_a, reserve_b, total_liquidity)

    total_liquidity = sub(total_liquidity, liquidity)
    ctx.registry.set_total(pair, total_liquidity)
    sender_liquidity = sub(ctx.registry.get_account(who, pair), liquidity)
    ctx.registry.set_account(who, pair, sender_liquidity)

    # While claims remain, the pool account must not be reaped
    keep_alive = total_liquidity != 0

    amount_a = min(amount_a, ctx.ledger.reducible_balance(asset_a, pool_account, keep_alive))
    amount_b = min(amount_b, ctx.ledger.reducible_balance(asset_b, pool_account, keep_alive))

    amount_a = ctx.ledger.transfer(asset_a, pool_account, who, amount_a, keep_alive)
    reserve_a = sub(reserve_a, amount_a)
    amount_b = ctx.ledger.transfer(asset_b, pool_account, who, amount_b, keep_alive)
    reserve_b = sub(reserve_b, amount_b)

    # Removing everything is always allowed
    if sender_liquidity != 0:
        ctx.guard.check_account_share(reserve_a, sender_liquidity, total_liquidity, asset_a)
        ctx.guard.check_account_share(reserve_b, sender_liquidity, total_liquidity, asset_b)

    logger.debug(
        "liquidity_removed",
        who=who,
        pair=pair,
        amount_a=amount_a,
        amount_b=amount_b,
        burned=liquidity,
        total_liquidity=total_liquidity,
    )
    event = LiquidityRemoved(
        who=who,
        asset_a=asset_a,
        amount_a=amount_a,
        asset_b=asset_b,
        amount_b=amount_b,
        liquidity=liquidity,
    )
    return RemoveLiquidityResult(amount_a=amount_a, amount_b=amount_b), event


__all__ = ["compute_withdrawal", "remove_liquidity"]
