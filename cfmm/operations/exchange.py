"""Exchange one asset of a pair for the other.

Constant product: x * y = k. A fixed fraction of the source amount is kept
by the pool as a fee; it enters the reserves without taking part in the
product calculation, so k grows with every exchange.

Formula:
    fee = ceil(amount_in * fee_fraction)
    new_reserve_out = ceil(reserve_in * reserve_out / (reserve_in + amount_in - fee))
    amount_out = reserve_out - new_reserve_out
"""

from __future__ import annotations

import structlog

from cfmm.config import Permill
from cfmm.errors import NoLiquidity, UnexpectedExchangeRate
from cfmm.events import Exchanged, ExchangeResult
from cfmm.operations.base import OperationContext
from cfmm.pairs import AccountId, AssetId, make_asset_pair
from cfmm.safe_int import add, mul_div_ceil, sub

logger = structlog.get_logger()


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee: Permill,
) -> int:
    """Output amount for an exact input, before any ledger cap.

    The new output reserve is rounded up, so amount_out is never overstated.

    Args:
        amount_in: Source amount supplied by the caller
        reserve_in: Pool balance of the source asset
        reserve_out: Pool balance of the destination asset
        fee: Fraction of amount_in kept by the pool

    Returns:
        Destination amount

    Raises:
        NoLiquidity: If either reserve is zero
        Overflow: If the new source reserve exceeds the balance width
    """
    if reserve_in == 0 or reserve_out == 0:
        raise NoLiquidity(f"Pool reserves ({reserve_in}, {reserve_out}) are empty")

    source_fee = fee.mul_ceil(amount_in)
    new_reserve_in = add(reserve_in, amount_in)
    new_reserve_in_less_fee = sub(new_reserve_in, source_fee)

    new_reserve_out = mul_div_ceil(reserve_in, reserve_out, new_reserve_in_less_fee)
    return sub(reserve_out, new_reserve_out)


def quote_exchange(
    ctx: OperationContext,
    source_asset: AssetId,
    source_amount: int,
    dest_asset: AssetId,
) -> int:
    """Destination amount an exchange would pay right now, without moving funds."""
    pair = make_asset_pair(source_asset, dest_asset)
    pool_account = ctx.pool_account(pair)
    reserve_source, reserve_dest = ctx.reserves(pool_account, source_asset, dest_asset)

    dest_amount = get_amount_out(source_amount, reserve_source, reserve_dest, ctx.config.exchange_fee)
    # The pool account must stay alive while it backs outstanding claims
    return min(dest_amount, ctx.ledger.reducible_balance(dest_asset, pool_account, True))


def exchange(
    ctx: OperationContext,
    who: AccountId,
    source_asset: AssetId,
    source_amount: int,
    dest_asset: AssetId,
    min_dest_amount: int,
) -> tuple[ExchangeResult, Exchanged]:
    """Swap source_amount of source_asset for dest_asset.

    Claim accounting is untouched; only reserves move. Must run inside a
    transaction.

    Raises:
        AssetsIdentical: If source_asset == dest_asset
        NoLiquidity: If either reserve is zero
        UnexpectedExchangeRate: If the payout is below min_dest_amount
        LedgerError: If the ledger rejects a transfer
    """
    pair = make_asset_pair(source_asset, dest_asset)
    pool_account = ctx.pool_account(pair)

    dest_amount = quote_exchange(ctx, source_asset, source_amount, dest_asset)
    if dest_amount < min_dest_amount:
        raise UnexpectedExchangeRate(
            f"Exchange pays {dest_amount} of {dest_asset!r}, below minimum {min_dest_amount}"
        )

    # The debit may exceed source_amount if the sender would otherwise be left with dust
    source_amount = ctx.ledger.transfer(source_asset, who, pool_account, source_amount, False)
    dest_amount = ctx.ledger.transfer(dest_asset, pool_account, who, dest_amount, True)

    logger.debug(
        "exchanged",
        who=who,
        source_asset=source_asset,
        source_amount=source_amount,
        dest_asset=dest_asset,
        dest_amount=dest_amount,
    )
    event = Exchanged(
        who=who,
        source_asset=source_asset,
        source_amount=source_amount,
        dest_asset=dest_asset,
        dest_amount=dest_amount,
    )
    return ExchangeResult(source_amount=source_amount, dest_amount=dest_amount), event


__all__ = ["get_amount_out", "quote_exchange", "exchange"]
