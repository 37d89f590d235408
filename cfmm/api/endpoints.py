"""API endpoints for the CFMM engine.

The engine is synchronous and single-writer, so every call that touches it
takes the module lock. Rejected operations raise; the exception handlers in
cfmm.api.main turn them into 400 responses.
"""

import threading

import structlog
from fastapi import APIRouter, Depends, HTTPException

from cfmm.engine import Cfmm, get_default_engine
from cfmm.ledger.memory import InMemoryAssetLedger
from cfmm.models import (
    AccountLiquidityResponse,
    AddLiquidityRequest,
    AddLiquidityResponse,
    BalanceResponse,
    CreateAssetRequest,
    ExchangeRequest,
    ExchangeResponse,
    MintRequest,
    PoolResponse,
    Position,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
)
from cfmm.pairs import AssetId, encode_asset_id

logger = structlog.get_logger()

router = APIRouter()

# Serializes access to the engine; sync endpoints run in a thread pool
_engine_lock = threading.Lock()


def get_engine() -> Cfmm:
    """Dependency provider for the engine instance.

    Override this in tests to inject a fresh engine:
        app.dependency_overrides[get_engine] = lambda: engine

    Returns:
        The engine used to serve requests.
    """
    return get_default_engine()


def parse_asset_id(raw: str) -> AssetId:
    """Path segments are strings; ASCII all-digit segments name integer assets.

    Raises:
        HTTPException: 422 if the id has no canonical encoding
    """
    asset: AssetId = int(raw) if raw.isascii() and raw.isdigit() else raw
    try:
        encode_asset_id(asset)
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    return asset


def _memory_ledger(engine: Cfmm) -> InMemoryAssetLedger:
    if not isinstance(engine.ledger, InMemoryAssetLedger):
        raise HTTPException(status_code=404, detail="Ledger administration is not available")
    return engine.ledger


@router.post("/liquidity/add")
def add_liquidity(
    request: AddLiquidityRequest,
    engine: Cfmm = Depends(get_engine),
) -> AddLiquidityResponse:
    """Add liquidity to the pool for assetA/assetB."""
    logger.info(
        "received_add_liquidity",
        who=request.who,
        asset_a=request.asset_a,
        asset_b=request.asset_b,
    )
    with _engine_lock:
        result = engine.add_liquidity(
            request.who,
            request.asset_a,
            int(request.min_amount_a),
            int(request.max_amount_a),
            request.asset_b,
            int(request.min_amount_b),
            int(request.max_amount_b),
        )
    return AddLiquidityResponse(
        amount_a=result.amount_a,
        amount_b=result.amount_b,
        minted_claims=result.minted_claims,
    )


@router.post("/liquidity/remove")
def remove_liquidity(
    request: RemoveLiquidityRequest,
    engine: Cfmm = Depends(get_engine),
) -> RemoveLiquidityResponse:
    """Redeem liquidity claims for assetA/assetB."""
    logger.info(
        "received_remove_liquidity",
        who=request.who,
        asset_a=request.asset_a,
        asset_b=request.asset_b,
        liquidity=request.liquidity,
    )
    with _engine_lock:
        result = engine.remove_liquidity(
            request.who, request.asset_a, request.asset_b, int(request.liquidity)
        )
    return RemoveLiquidityResponse(amount_a=result.amount_a, amount_b=result.amount_b)


@router.post("/exchange")
def exchange(
    request: ExchangeRequest,
    engine: Cfmm = Depends(get_engine),
) -> ExchangeResponse:
    """Exchange an exact amount of sourceAsset for destAsset."""
    logger.info(
        "received_exchange",
        who=request.who,
        source_asset=request.source_asset,
        source_amount=request.source_amount,
        dest_asset=request.dest_asset,
    )
    with _engine_lock:
        result = engine.exchange(
            request.who,
            request.source_asset,
            int(request.source_amount),
            request.dest_asset,
            int(request.min_dest_amount),
        )
    return ExchangeResponse(source_amount=result.source_amount, dest_amount=result.dest_amount)


@router.get("/quote/{source_asset}/{dest_asset}/{source_amount}")
def quote(
    source_asset: str,
    dest_asset: str,
    source_amount: int,
    engine: Cfmm = Depends(get_engine),
) -> QuoteResponse:
    """Destination amount an exchange would currently pay."""
    with _engine_lock:
        dest_amount = engine.quote_exchange(
            parse_asset_id(source_asset), source_amount, parse_asset_id(dest_asset)
        )
    return QuoteResponse(dest_amount=dest_amount)


@router.get("/pools/{asset_a}/{asset_b}")
def get_pool(
    asset_a: str,
    asset_b: str,
    engine: Cfmm = Depends(get_engine),
) -> PoolResponse:
    """Reserves of a pool. A missing pool reports zero reserves."""
    a, b = parse_asset_id(asset_a), parse_asset_id(asset_b)
    with _engine_lock:
        reserve_a, reserve_b = engine.get_exchange_rate(a, b)
        total = engine.total_liquidity(a, b)
        pool_account = engine.pool_account(a, b)
    return PoolResponse(
        asset_a=a,
        asset_b=b,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        total_liquidity=total,
        pool_account=pool_account,
    )


@router.get("/accounts/{who}/liquidity")
def get_account_liquidity(
    who: str,
    engine: Cfmm = Depends(get_engine),
) -> AccountLiquidityResponse:
    """All liquidity positions held by an account."""
    with _engine_lock:
        positions = engine.registry.liquidity_of(who)
    return AccountLiquidityResponse(
        who=who,
        positions=[
            Position(asset_a=pair[0], asset_b=pair[1], liquidity=liquidity)
            for pair, liquidity in positions.items()
        ],
    )


@router.post("/assets", status_code=201)
def create_asset(
    request: CreateAssetRequest,
    engine: Cfmm = Depends(get_engine),
) -> dict[str, object]:
    """Register an asset in the in-memory ledger."""
    ledger = _memory_ledger(engine)
    with _engine_lock:
        try:
            ledger.create_asset(request.asset, int(request.min_balance))
        except ValueError as err:
            raise HTTPException(status_code=400, detail=str(err)) from err
    return {"asset": request.asset, "minBalance": request.min_balance}


@router.post("/assets/{asset}/mint")
def mint(
    asset: str,
    request: MintRequest,
    engine: Cfmm = Depends(get_engine),
) -> BalanceResponse:
    """Credit an account with newly created units of an asset."""
    ledger = _memory_ledger(engine)
    asset_id = parse_asset_id(asset)
    with _engine_lock:
        ledger.mint(asset_id, request.who, int(request.amount))
        balance = ledger.balance_of(asset_id, request.who)
    return BalanceResponse(asset=asset_id, who=request.who, balance=balance)


@router.get("/assets/{asset}/balance/{who}")
def get_balance(
    asset: str,
    who: str,
    engine: Cfmm = Depends(get_engine),
) -> BalanceResponse:
    asset_id = parse_asset_id(asset)
    with _engine_lock:
        balance = engine.ledger.balance_of(asset_id, who)
    return BalanceResponse(asset=asset_id, who=who, balance=balance)
