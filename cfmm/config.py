"""Configuration for the CFMM engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from cfmm.errors import InvalidFeeError
from cfmm.safe_int import mul_div_ceil

# Parts-per-million denominator for fee fractions
PERMILL_ACCURACY = 1_000_000


@dataclass(frozen=True, order=True)
class Permill:
    """A fraction in [0, 1) stored as integer parts per million.

    For 10% this holds parts=100_000.
    """

    parts: int

    def __post_init__(self) -> None:
        if not 0 <= self.parts < PERMILL_ACCURACY:
            raise InvalidFeeError(
                f"Fee must be in [0, 1), got {self.parts}/{PERMILL_ACCURACY}"
            )

    @classmethod
    def from_fraction(cls, fraction: Decimal | str) -> Permill:
        """Build from a decimal fraction such as "0.003".

        Rounds half up to the nearest part per million.

        Raises:
            InvalidFeeError: If the fraction is malformed or outside [0, 1)
        """
        try:
            value = Decimal(str(fraction))
            parts = int((value * PERMILL_ACCURACY).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        except (ValueError, InvalidOperation) as err:
            raise InvalidFeeError(f"Invalid fee fraction: {fraction!r}") from err
        return cls(parts)

    @classmethod
    def zero(cls) -> Permill:
        return cls(0)

    def mul_ceil(self, amount: int) -> int:
        """ceil(amount * fraction)."""
        return mul_div_ceil(amount, self.parts, PERMILL_ACCURACY)

    def as_decimal(self) -> Decimal:
        return Decimal(self.parts) / PERMILL_ACCURACY


@dataclass(frozen=True)
class CfmmConfig:
    """Engine parameters.

    Attributes:
        pool_min_amount_multiple: After adding or removing liquidity, the
            amount of each asset effectively owned by the sender must be at
            least this multiple of the asset's ledger minimum balance.
        initial_liquidity_per_asset_unit: Claims minted to the first provider
            per unit of the larger of the two deposited amounts.
        exchange_fee: Portion of each exchange's source amount kept by the
            pool as a fee.
        pallet_id: Namespace mixed into every derived pool account.
    """

    pool_min_amount_multiple: int = 10
    initial_liquidity_per_asset_unit: int = 10
    exchange_fee: Permill = Permill(100_000)
    pallet_id: bytes = b"py/cfmm "

    def __post_init__(self) -> None:
        if self.pool_min_amount_multiple < 0:
            raise ValueError(
                f"pool_min_amount_multiple must be non-negative: {self.pool_min_amount_multiple}"
            )
        if self.initial_liquidity_per_asset_unit <= 0:
            raise ValueError(
                "initial_liquidity_per_asset_unit must be positive: "
                f"{self.initial_liquidity_per_asset_unit}"
            )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> CfmmConfig:
        """Load configuration from environment variables.

        - CFMM_POOL_MIN_AMOUNT_MULTIPLE (default: 10)
        - CFMM_INITIAL_LIQUIDITY_PER_ASSET_UNIT (default: 10)
        - CFMM_EXCHANGE_FEE: decimal fraction (default: 0.1)
        - CFMM_PALLET_ID: namespace string (default: "py/cfmm ")
        """
        env = os.environ if environ is None else environ
        default = DEFAULT_CONFIG
        fee = env.get("CFMM_EXCHANGE_FEE")
        pallet_id = env.get("CFMM_PALLET_ID")
        return cls(
            pool_min_amount_multiple=int(
                env.get("CFMM_POOL_MIN_AMOUNT_MULTIPLE", default.pool_min_amount_multiple)
            ),
            initial_liquidity_per_asset_unit=int(
                env.get(
                    "CFMM_INITIAL_LIQUIDITY_PER_ASSET_UNIT",
                    default.initial_liquidity_per_asset_unit,
                )
            ),
            exchange_fee=Permill.from_fraction(fee) if fee else default.exchange_fee,
            pallet_id=pallet_id.encode() if pallet_id else default.pallet_id,
        )


# Default configuration instance
DEFAULT_CONFIG = CfmmConfig()
