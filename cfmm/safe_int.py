"""Checked fixed-width arithmetic for pool balances.

Balances are unsigned 128-bit quantities. Any product of two balances is
computed in a 256-bit "wide" domain and narrowed back to a balance only after
dividing, so rate math never loses precision and never silently wraps.

This module provides:
- SafeInt: an operator-style wrapper for wide-domain expressions
- add / sub / checked_mul / saturating_mul: balance-width helpers
- mul_wide / mul_div_floor / mul_div_ceil: product-then-divide helpers

Usage pattern:
    from cfmm.safe_int import S, mul_div_floor

    minted = mul_div_floor(max_amount, total_liquidity, reserve)

    # Operator style for ad-hoc wide expressions
    biased = S(a) * S(b) + S(c) - S(1)   # Underflow if c == 0
    result = (biased // S(c)).to_balance()
"""

from __future__ import annotations

BALANCE_BITS = 128
BALANCE_MAX = 2**BALANCE_BITS - 1
WIDE_MAX = 2 ** (2 * BALANCE_BITS) - 1


class SafeIntError(ArithmeticError):
    """Base class for checked arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Divisor is zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class Overflow(SafeIntError):
    """Result does not fit in the target width."""

    pass


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Subtraction below zero raises Underflow and division by zero raises
    DivisionByZero immediately. Width is only enforced on narrowing:
    to_balance() and to_wide() raise Overflow when the value does not fit.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            if value < 0:
                raise Underflow(f"SafeInt cannot hold a negative value: {value}")
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _raw(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Checked subtraction.

        Raises:
            Underflow: If result would be negative
        """
        rhs = _raw(other)
        result = self._value - rhs
        if result < 0:
            raise Underflow(f"Balance underflow: {self._value} - {rhs}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Balance underflow: {other} - {self._value}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _raw(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding down.

        Raises:
            DivisionByZero: If other is zero
        """
        rhs = _raw(other)
        if rhs == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // rhs)

    # --- Ordering ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _raw(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _raw(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _raw(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _raw(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Rounding and narrowing ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding up.

        Raises:
            DivisionByZero: If other is zero
        """
        rhs = _raw(other)
        if rhs == 0:
            raise DivisionByZero(f"Division by zero: ceil({self._value} / 0)")
        return SafeInt((self._value + rhs - 1) // rhs)

    def to_balance(self) -> int:
        """Narrow to a balance.

        Raises:
            Overflow: If value exceeds 2^128-1
        """
        if self._value > BALANCE_MAX:
            raise Overflow(f"Value exceeds balance max: {self._value}")
        return self._value

    def to_wide(self) -> int:
        """Narrow to the wide (double-width) domain.

        Raises:
            Overflow: If value exceeds 2^256-1
        """
        if self._value > WIDE_MAX:
            raise Overflow(f"Value exceeds wide max: {self._value}")
        return self._value


def _raw(x: SafeInt | int) -> int:
    """Plain int behind a SafeInt operand."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Short alias for expression-heavy call sites
S = SafeInt


# --- Balance-width helpers ---


def add(a: int, b: int) -> int:
    """Checked balance addition.

    Raises:
        Overflow: If the sum exceeds 2^128-1
    """
    return (S(a) + S(b)).to_balance()


def sub(a: int, b: int) -> int:
    """Checked balance subtraction.

    Raises:
        Underflow: If b > a
    """
    return (S(a) - S(b)).value


def checked_mul(a: int, b: int) -> int:
    """Balance-width multiplication.

    Raises:
        Overflow: If the product exceeds 2^128-1
    """
    return (S(a) * S(b)).to_balance()


def saturating_mul(a: int, b: int) -> int:
    """Balance-width multiplication clamped to the balance maximum."""
    return min(a * b, BALANCE_MAX)


# --- Wide-domain helpers ---


def mul_wide(a: int, b: int) -> int:
    """Double-width product of two balances.

    Two balances always fit, so Overflow only fires for out-of-range inputs.
    """
    return (S(a) * S(b)).to_wide()


def mul_div_floor(a: int, b: int, c: int) -> int:
    """floor((a * b) / c), computed in the wide domain.

    Raises:
        DivisionByZero: If c is zero
        Overflow: If the quotient does not fit in a balance
    """
    product = S(mul_wide(a, b))
    return (product // S(c)).to_balance()


def mul_div_ceil(a: int, b: int, c: int) -> int:
    """ceil((a * b) / c), computed in the wide domain.

    Raises:
        DivisionByZero: If c is zero
        Overflow: If the quotient does not fit in a balance
    """
    if c == 0:
        raise DivisionByZero(f"Division by zero: ceil({a} * {b} / 0)")
    biased = S(mul_wide(a, b)) + (S(c) - S(1))
    return (S(biased.to_wide()) // S(c)).to_balance()


__all__ = [
    "BALANCE_BITS",
    "BALANCE_MAX",
    "WIDE_MAX",
    "SafeIntError",
    "DivisionByZero",
    "Underflow",
    "Overflow",
    "SafeInt",
    "S",
    "add",
    "sub",
    "checked_mul",
    "saturating_mul",
    "mul_wide",
    "mul_div_floor",
    "mul_div_ceil",
]
