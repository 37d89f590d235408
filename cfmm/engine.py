"""Constant-product market maker engine.

The Cfmm class is the entry point for the dispatch layer. It owns the claim
registry, holds a reference to the asset ledger, and runs each operation as
a single transaction: if anything fails, the registry and the ledger are
restored to their state before the call and the error is re-raised
unchanged.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from cfmm.config import DEFAULT_CONFIG, CfmmConfig
from cfmm.errors import AssetsIdentical, error_kind
from cfmm.events import (
    AddLiquidityResult,
    Event,
    ExchangeResult,
    RemoveLiquidityResult,
)
from cfmm.ledger.base import TransactionalLedger
from cfmm.operations import OperationContext
from cfmm.operations import add_liquidity as add_liquidity_op
from cfmm.operations import exchange as exchange_op
from cfmm.operations import quote_exchange as quote_exchange_op
from cfmm.operations import remove_liquidity as remove_liquidity_op
from cfmm.pairs import AccountId, AssetId, make_asset_pair
from cfmm.registry import LiquidityRegistry

logger = structlog.get_logger()


class Cfmm:
    """Pools, claims and the three public state transitions.

    Operations run one at a time. The engine does no locking of its own;
    callers sharing an instance across threads must serialize access.

    Args:
        ledger: Asset ledger holding all balances, including pool reserves.
        config: Engine parameters. Defaults to DEFAULT_CONFIG.
        registry: Claim registry. A fresh one is created if None.
    """

    def __init__(
        self,
        ledger: TransactionalLedger,
        config: CfmmConfig | None = None,
        registry: LiquidityRegistry | None = None,
    ) -> None:
        self.ledger = ledger
        self.config = config if config is not None else DEFAULT_CONFIG
        self.registry = registry if registry is not None else LiquidityRegistry()
        self._ctx = OperationContext(registry=self.registry, ledger=ledger, config=self.config)
        self._events: list[Event] = []

    @property
    def events(self) -> list[Event]:
        """Events deposited by committed operations, oldest first."""
        return list(self._events)

    def take_events(self) -> list[Event]:
        """Return and clear the deposited events."""
        events, self._events = self._events, []
        return events

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        """Run a block atomically against the registry and ledger.

        The registry, and the in-memory ledger, are copied whole, so cost
        grows with total state.
        """
        registry_snapshot = self.registry.snapshot()
        ledger_snapshot = self.ledger.snapshot()
        try:
            yield
        except Exception as exc:
            self.registry.restore(registry_snapshot)
            self.ledger.restore(ledger_snapshot)
            logger.warning(
                "operation_rolled_back",
                operation=operation,
                error=error_kind(exc),
                detail=str(exc),
            )
            raise

    def add_liquidity(
        self,
        who: AccountId,
        asset_a: AssetId,
        min_amount_a: int,
        max_amount_a: int,
        asset_b: AssetId,
        min_amount_b: int,
        max_amount_b: int,
    ) -> AddLiquidityResult:
        """Add liquidity for an asset pair.

        If the sender is the first provider for the pair, the full maximum
        amounts are deposited. Otherwise an equivalent value of each asset is
        deposited at the current exchange rate. The call aborts if either
        amount would be below its minimum.

        Returns:
            AddLiquidityResult with the amounts moved and claims minted
        """
        with self._transaction("add_liquidity"):
            result, event = add_liquidity_op(
                self._ctx,
                who,
                asset_a,
                min_amount_a,
                max_amount_a,
                asset_b,
                min_amount_b,
                max_amount_b,
            )
        self._deposit(event)
        return result

    def remove_liquidity(
        self,
        who: AccountId,
        asset_a: AssetId,
        asset_b: AssetId,
        liquidity: int,
    ) -> RemoveLiquidityResult:
        """Redeem claims for the sender's share of the pool.

        Returns:
            RemoveLiquidityResult with the amounts paid out
        """
        with self._transaction("remove_liquidity"):
            result, event = remove_liquidity_op(self._ctx, who, asset_a, asset_b, liquidity)
        self._deposit(event)
        return result

    def exchange(
        self,
        who: AccountId,
        source_asset: AssetId,
        source_amount: int,
        dest_asset: AssetId,
        min_dest_amount: int,
    ) -> ExchangeResult:
        """Exchange source_amount of source_asset for dest_asset at the pool rate.

        Returns:
            ExchangeResult with the amounts actually moved
        """
        with self._transaction("exchange"):
            result, event = exchange_op(
                self._ctx, who, source_asset, source_amount, dest_asset, min_dest_amount
            )
        self._deposit(event)
        return result

    def quote_exchange(self, source_asset: AssetId, source_amount: int, dest_asset: AssetId) -> int:
        """Amount of dest_asset an exchange would pay now. Read-only."""
        return quote_exchange_op(self._ctx, source_asset, source_amount, dest_asset)

    def get_exchange_rate(self, asset_a: AssetId, asset_b: AssetId) -> tuple[int, int]:
        """Pool reserves of asset_a and asset_b, in that order.

        The ratio is the current exchange rate. (0, 0) is returned when the
        pair is invalid or has no pool.
        """
        try:
            pair = make_asset_pair(asset_a, asset_b)
        except AssetsIdentical:
            return 0, 0
        return self._ctx.reserves(self._ctx.pool_account(pair), asset_a, asset_b)

    def pool_account(self, asset_a: AssetId, asset_b: AssetId) -> AccountId:
        """Account holding the reserves of the pool for a pair."""
        return self._ctx.pool_account(make_asset_pair(asset_a, asset_b))

    def total_liquidity(self, asset_a: AssetId, asset_b: AssetId) -> int:
        return self.registry.get_total(make_asset_pair(asset_a, asset_b))

    def liquidity_of(self, who: AccountId, asset_a: AssetId, asset_b: AssetId) -> int:
        return self.registry.get_account(who, make_asset_pair(asset_a, asset_b))

    def _deposit(self, event: Event) -> None:
        self._events.append(event)
        logger.info("event_deposited", kind=type(event).__name__, who=event.who)


_default_engine: Cfmm | None = None


def get_default_engine() -> Cfmm:
    """Process-wide engine backed by an in-memory ledger.

    Configuration is read from the environment on first use.
    """
    global _default_engine
    if _default_engine is None:
        from cfmm.ledger.memory import InMemoryAssetLedger

        config = CfmmConfig.from_env()
        logger.info(
            "engine_created",
            ledger="in_memory",
            exchange_fee=str(config.exchange_fee.as_decimal()),
            pool_min_amount_multiple=config.pool_min_amount_multiple,
        )
        _default_engine = Cfmm(InMemoryAssetLedger(), config)
    return _default_engine


__all__ = ["Cfmm", "get_default_engine"]
