"""CFMM error classes.

Arithmetic failures (Overflow, Underflow, DivisionByZero) live in
cfmm.safe_int and are re-exported here so callers can catch every error kind
from one place.
"""

from cfmm.safe_int import DivisionByZero, Overflow, SafeIntError, Underflow


class CfmmError(Exception):
    """Base error for pool operations."""

    pass


class AssetsIdentical(CfmmError):
    """The two assets of a pair are the same; there is nothing to exchange."""

    pass


class InsufficientPoolAmount(CfmmError):
    """The account's effective share of the pool is below the anti-griefing floor."""

    pass


class NoLiquidity(CfmmError):
    """The pool for the asset pair is empty."""

    pass


class UnexpectedExchangeRate(CfmmError):
    """The realized amount violates the caller's slippage bound."""

    pass


class LedgerError(Exception):
    """Base error raised by asset ledgers."""

    pass


class BalanceLow(LedgerError):
    """The source account cannot cover the transfer."""

    pass


class BelowMinimum(LedgerError):
    """The transfer would create an account holding less than the minimum balance."""

    pass


class UnknownAsset(LedgerError):
    """The asset has not been created in the ledger."""

    pass


class InvalidFeeError(ValueError):
    """Exchange fee must be in range [0, 1)."""

    pass


def error_kind(exc: BaseException) -> str:
    """Name of the error kind as surfaced to callers (e.g. "NoLiquidity")."""
    return type(exc).__name__


__all__ = [
    "SafeIntError",
    "Overflow",
    "Underflow",
    "DivisionByZero",
    "CfmmError",
    "AssetsIdentical",
    "InsufficientPoolAmount",
    "NoLiquidity",
    "UnexpectedExchangeRate",
    "LedgerError",
    "BalanceLow",
    "BelowMinimum",
    "UnknownAsset",
    "InvalidFeeError",
    "error_kind",
]
