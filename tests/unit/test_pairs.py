"""Tests for asset pair canonicalization and pool accounts."""

import pytest

from cfmm.errors import AssetsIdentical
from cfmm.pairs import derive_pool_account, encode_asset_id, make_asset_pair


class TestEncodeAssetId:
    def test_int_encoding_sorts_numerically(self):
        assert encode_asset_id(1) < encode_asset_id(256)
        assert encode_asset_id(255) < encode_asset_id(256)

    def test_str_encoding_is_length_prefixed(self):
        """"ab" must not be a prefix-collision of "a" followed by something."""
        assert encode_asset_id("ab") != encode_asset_id("a") + b"b"
        assert encode_asset_id("a") == b"\x01\x00\x00\x00\x01a"

    def test_ints_sort_before_strings(self):
        assert encode_asset_id(2**64 - 1) < encode_asset_id("")

    def test_int_and_digit_string_differ(self):
        assert encode_asset_id(1) != encode_asset_id("1")

    def test_out_of_range_int(self):
        with pytest.raises(ValueError):
            encode_asset_id(-1)
        with pytest.raises(ValueError):
            encode_asset_id(2**64)

    def test_unsupported_types(self):
        with pytest.raises(TypeError):
            encode_asset_id(1.5)  # type: ignore
        with pytest.raises(TypeError):
            encode_asset_id(True)


class TestMakeAssetPair:
    def test_order_independent(self):
        assert make_asset_pair(0, 1) == make_asset_pair(1, 0) == (0, 1)

    def test_string_assets(self):
        assert make_asset_pair("usdc", "dot") == ("dot", "usdc")

    def test_mixed_types(self):
        assert make_asset_pair("dot", 7) == (7, "dot")

    def test_identical_assets_rejected(self):
        with pytest.raises(AssetsIdentical):
            make_asset_pair(3, 3)
        with pytest.raises(AssetsIdentical):
            make_asset_pair("x", "x")


class TestDerivePoolAccount:
    def test_deterministic(self):
        pair = make_asset_pair(0, 1)
        assert derive_pool_account(pair, b"py/cfmm ") == derive_pool_account(pair, b"py/cfmm ")

    def test_format(self):
        account = derive_pool_account((0, 1), b"py/cfmm ")
        assert account.startswith("0x")
        assert len(account) == 66

    def test_distinct_pairs_distinct_accounts(self):
        accounts = {
            derive_pool_account(make_asset_pair(a, b), b"py/cfmm ")
            for a in range(6)
            for b in range(6)
            if a != b
        }
        assert len(accounts) == 15

    def test_pallet_id_namespaces_accounts(self):
        pair = (0, 1)
        assert derive_pool_account(pair, b"one") != derive_pool_account(pair, b"two")
