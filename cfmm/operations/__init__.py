"""Pool state transitions.

Each operation reads reserves and claims, computes the transition with
checked arithmetic and writes its effects. None of them rolls back on its
own; the engine wraps every call in a transaction.
"""

from cfmm.operations.add_liquidity import add_liquidity, compute_join
from cfmm.operations.base import OperationContext
from cfmm.operations.exchange import exchange, get_amount_out, quote_exchange
from cfmm.operations.remove_liquidity import compute_withdrawal, remove_liquidity

__all__ = [
    "OperationContext",
    "add_liquidity",
    "compute_join",
    "remove_liquidity",
    "compute_withdrawal",
    "exchange",
    "get_amount_out",
    "quote_exchange",
]
