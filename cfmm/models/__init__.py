"""Pydantic models for the CFMM dispatch API."""

from cfmm.models.requests import (
    AccountLiquidityResponse,
    AddLiquidityRequest,
    AddLiquidityResponse,
    BalanceResponse,
    CreateAssetRequest,
    ErrorResponse,
    ExchangeRequest,
    ExchangeResponse,
    MintRequest,
    PoolResponse,
    Position,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
)
from cfmm.models.types import Balance, WireAssetId

__all__ = [
    # Types
    "Balance",
    "WireAssetId",
    # Operations
    "AddLiquidityRequest",
    "AddLiquidityResponse",
    "RemoveLiquidityRequest",
    "RemoveLiquidityResponse",
    "ExchangeRequest",
    "ExchangeResponse",
    "QuoteResponse",
    # Queries
    "PoolResponse",
    "Position",
    "AccountLiquidityResponse",
    "BalanceResponse",
    # Ledger administration
    "CreateAssetRequest",
    "MintRequest",
    # Errors
    "ErrorResponse",
]
