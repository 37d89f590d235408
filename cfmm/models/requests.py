"""Pydantic models for dispatch API requests and responses."""

from pydantic import BaseModel, Field

from cfmm.models.types import Account, Balance, WireAssetId


class AddLiquidityRequest(BaseModel):
    """Deposit both assets of a pair in exchange for liquidity claims."""

    who: Account
    asset_a: WireAssetId = Field(alias="assetA")
    min_amount_a: Balance = Field(default="0", alias="minAmountA")
    max_amount_a: Balance = Field(alias="maxAmountA")
    asset_b: WireAssetId = Field(alias="assetB")
    min_amount_b: Balance = Field(default="0", alias="minAmountB")
    max_amount_b: Balance = Field(alias="maxAmountB")

    model_config = {"populate_by_name": True}


class AddLiquidityResponse(BaseModel):
    amount_a: Balance = Field(alias="amountA")
    amount_b: Balance = Field(alias="amountB")
    minted_claims: Balance = Field(alias="mintedClaims")

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    """Redeem liquidity claims for the underlying assets."""

    who: Account
    asset_a: WireAssetId = Field(alias="assetA")
    asset_b: WireAssetId = Field(alias="assetB")
    liquidity: Balance

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    amount_a: Balance = Field(alias="amountA")
    amount_b: Balance = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class ExchangeRequest(BaseModel):
    """Swap an exact source amount for the destination asset."""

    who: Account
    source_asset: WireAssetId = Field(alias="sourceAsset")
    source_amount: Balance = Field(alias="sourceAmount")
    dest_asset: WireAssetId = Field(alias="destAsset")
    min_dest_amount: Balance = Field(
        default="0",
        alias="minDestAmount",
        description="Abort if the payout is below this amount.",
    )

    model_config = {"populate_by_name": True}


class ExchangeResponse(BaseModel):
    source_amount: Balance = Field(alias="sourceAmount")
    dest_amount: Balance = Field(alias="destAmount")

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    dest_amount: Balance = Field(alias="destAmount")

    model_config = {"populate_by_name": True}


class PoolResponse(BaseModel):
    """Reserves and claim supply of a pool, in the order the assets were requested."""

    asset_a: WireAssetId = Field(alias="assetA")
    asset_b: WireAssetId = Field(alias="assetB")
    reserve_a: Balance = Field(alias="reserveA")
    reserve_b: Balance = Field(alias="reserveB")
    total_liquidity: Balance = Field(alias="totalLiquidity")
    pool_account: str = Field(alias="poolAccount")

    model_config = {"populate_by_name": True}


class Position(BaseModel):
    asset_a: WireAssetId = Field(alias="assetA")
    asset_b: WireAssetId = Field(alias="assetB")
    liquidity: Balance

    model_config = {"populate_by_name": True}


class AccountLiquidityResponse(BaseModel):
    who: Account
    positions: list[Position] = Field(default_factory=list)


class CreateAssetRequest(BaseModel):
    asset: WireAssetId
    min_balance: Balance = Field(alias="minBalance")

    model_config = {"populate_by_name": True}


class MintRequest(BaseModel):
    who: Account
    amount: Balance


class BalanceResponse(BaseModel):
    asset: WireAssetId
    who: Account
    balance: Balance


class ErrorResponse(BaseModel):
    """Body returned when an operation is rejected."""

    error: str = Field(description="Error kind, e.g. NoLiquidity")
    detail: str = ""
