"""Asset pair canonicalization and pool account derivation.

A pool is keyed by an unordered pair of distinct assets. Pairs are stored in
canonical order, determined by comparing an unambiguous byte encoding of each
asset id, so (a, b) and (b, a) always resolve to the same registry key and the
same pool account.
"""

from __future__ import annotations

import hashlib
from typing import TypeAlias

from cfmm.errors import AssetsIdentical

AssetId: TypeAlias = int | str
AccountId: TypeAlias = str
AssetPair: TypeAlias = tuple[AssetId, AssetId]

ASSET_ID_INT_MAX = 2**64 - 1

_INT_TAG = b"\x00"
_STR_TAG = b"\x01"

# Prefix shared by all module-derived accounts
_ACCOUNT_PREFIX = b"modl"


def encode_asset_id(asset: AssetId) -> bytes:
    """Encode an asset id to bytes whose lexicographic order is canonical.

    Integers encode as a tag byte plus 8 bytes big-endian, so they sort
    numerically. Strings encode as a tag byte, a 4-byte big-endian length and
    the UTF-8 bytes. All integers sort before all strings.

    Raises:
        TypeError: If asset is neither int nor str
        ValueError: If an integer id is negative or exceeds 2^64-1
    """
    if isinstance(asset, bool):
        raise TypeError("Asset id cannot be a bool")
    if isinstance(asset, int):
        if not 0 <= asset <= ASSET_ID_INT_MAX:
            raise ValueError(f"Integer asset id out of range: {asset}")
        return _INT_TAG + asset.to_bytes(8, "big")
    if isinstance(asset, str):
        raw = asset.encode("utf-8")
        return _STR_TAG + len(raw).to_bytes(4, "big") + raw
    raise TypeError(f"Asset id must be int or str, got {type(asset).__name__}")


def make_asset_pair(asset_a: AssetId, asset_b: AssetId) -> AssetPair:
    """Return the canonical pair for two assets, in either order.

    Raises:
        AssetsIdentical: If both ids are equal
    """
    encoded_a = encode_asset_id(asset_a)
    encoded_b = encode_asset_id(asset_b)
    if encoded_a == encoded_b:
        raise AssetsIdentical(f"Cannot pair asset {asset_a!r} with itself")
    return (asset_a, asset_b) if encoded_a < encoded_b else (asset_b, asset_a)


def encode_pair(pair: AssetPair) -> bytes:
    """Byte encoding of a canonical pair."""
    return encode_asset_id(pair[0]) + encode_asset_id(pair[1])


def derive_pool_account(pair: AssetPair, pallet_id: bytes) -> AccountId:
    """Deterministic account that holds the reserves of a pool.

    BLAKE2b-256 over the account prefix, the pallet id and the encoded pair,
    rendered as 0x-prefixed lowercase hex.
    """
    digest = hashlib.blake2b(
        _ACCOUNT_PREFIX + pallet_id + encode_pair(pair),
        digest_size=32,
    ).hexdigest()
    return "0x" + digest


__all__ = [
    "AssetId",
    "AccountId",
    "AssetPair",
    "ASSET_ID_INT_MAX",
    "encode_asset_id",
    "make_asset_pair",
    "encode_pair",
    "derive_pool_account",
]
