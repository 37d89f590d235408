"""Constant-product market maker accounting core."""

from cfmm.config import DEFAULT_CONFIG, CfmmConfig, Permill
from cfmm.engine import Cfmm, get_default_engine
from cfmm.ledger import InMemoryAssetLedger

__version__ = "0.1.0"
__all__ = [
    "Cfmm",
    "CfmmConfig",
    "DEFAULT_CONFIG",
    "InMemoryAssetLedger",
    "Permill",
    "get_default_engine",
    "__version__",
]
