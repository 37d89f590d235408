"""Common accounts, assets and amounts for tests.

Assets mirror a small fungibles ledger: three assets whose minimum balances
are 10, 20 and 30. With the default pool_min_amount_multiple of 10, the
anti-griefing floor is 100 of asset 0 and 200 of asset 1.
"""

ALICE = "alice"
BOB = "bob"
CAROL = "carol"

ASSET_0 = 0
ASSET_1 = 1
ASSET_2 = 2

MIN_BALANCES = {
    ASSET_0: 10,
    ASSET_1: 20,
    ASSET_2: 30,
}

# Every funded account starts with this much of every asset
STARTING_BALANCE = 10_000
