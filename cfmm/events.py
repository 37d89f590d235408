"""Records produced by pool operations.

Each successful operation returns a result to its caller and deposits one
event describing what happened. Amounts are those actually moved by the
ledger, and asset order follows the caller's arguments.
"""

from __future__ import annotations

from dataclasses import dataclass

from cfmm.pairs import AccountId, AssetId


@dataclass(frozen=True)
class AddLiquidityResult:
    """Amounts contributed and claims minted by add_liquidity."""

    amount_a: int
    amount_b: int
    minted_claims: int


@dataclass(frozen=True)
class RemoveLiquidityResult:
    """Amounts paid out by remove_liquidity."""

    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class ExchangeResult:
    """Amounts actually debited from and credited to the caller."""

    source_amount: int
    dest_amount: int


@dataclass(frozen=True)
class LiquidityAdded:
    who: AccountId
    asset_a: AssetId
    amount_a: int
    asset_b: AssetId
    amount_b: int
    liquidity: int


@dataclass(frozen=True)
class LiquidityRemoved:
    who: AccountId
    asset_a: AssetId
    amount_a: int
    asset_b: AssetId
    amount_b: int
    liquidity: int


@dataclass(frozen=True)
class Exchanged:
    who: AccountId
    source_asset: AssetId
    source_amount: int
    dest_asset: AssetId
    dest_amount: int


Event = LiquidityAdded | LiquidityRemoved | Exchanged

__all__ = [
    "AddLiquidityResult",
    "RemoveLiquidityResult",
    "ExchangeResult",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Exchanged",
    "Event",
]
