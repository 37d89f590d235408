"""Asset ledger collaborators.

Provides the AssetLedger protocol consumed by the engine and an in-memory
reference implementation.
"""

from cfmm.ledger.base import AssetLedger, TransactionalLedger
from cfmm.ledger.memory import InMemoryAssetLedger, LedgerSnapshot

__all__ = [
    "AssetLedger",
    "TransactionalLedger",
    "InMemoryAssetLedger",
    "LedgerSnapshot",
]
