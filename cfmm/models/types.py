"""Shared wire types for the dispatch API.

Balances travel as decimal strings so clients without big-integer support do
not lose precision.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from cfmm.pairs import encode_asset_id
from cfmm.safe_int import BALANCE_MAX


def validate_balance(value: Any) -> str:
    """Validate that a value is a balance, returning it as a decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid balance as decimal string

    Raises:
        ValueError: If value is not a non-negative integer below 2^128
    """
    if isinstance(value, bool):
        raise ValueError("Balance cannot be a bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Balance must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Balance must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Balance cannot be negative: {value}")
    if int_value > BALANCE_MAX:
        raise ValueError(f"Balance overflow: {value} > 2^128-1")
    return str(int_value)


def validate_asset_id(value: Any) -> Any:
    """Check that an asset id has a canonical encoding."""
    try:
        encode_asset_id(value)
    except TypeError as err:
        raise ValueError(str(err)) from err
    return value


# 128-bit unsigned integer as decimal string (validated)
Balance = Annotated[
    str,
    BeforeValidator(validate_balance),
    Field(description="128-bit unsigned integer as decimal string"),
]

# Integer (u64) or string asset identifier
WireAssetId = Annotated[
    int | str,
    BeforeValidator(validate_asset_id),
    Field(description="Asset identifier"),
]

# Account identifier
Account = Annotated[str, Field(min_length=1, max_length=128)]
