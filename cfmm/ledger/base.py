"""Interfaces for the external asset ledger.

The engine never moves balances itself. It reads pool reserves and asks the
ledger to transfer assets between accounts; the ledger decides the amount
actually moved (which may exceed the request to avoid leaving dust below the
asset's minimum balance).
"""

from typing import Any, Protocol, runtime_checkable

from cfmm.pairs import AccountId, AssetId


@runtime_checkable
class AssetLedger(Protocol):
    """Capability interface of a fungible asset ledger.

    All amounts are balances (non-negative integers below 2^128).
    """

    def balance_of(self, asset: AssetId, account: AccountId) -> int:
        """Current balance of an account (0 if it holds none)."""
        ...

    def reducible_balance(self, asset: AssetId, account: AccountId, keep_alive: bool) -> int:
        """Amount that can be withdrawn from an account.

        With keep_alive, the account must be left holding at least the
        asset's minimum balance.
        """
        ...

    def minimum_balance(self, asset: AssetId) -> int:
        """Smallest non-zero balance an account may hold of the asset."""
        ...

    def transfer(
        self,
        asset: AssetId,
        source: AccountId,
        dest: AccountId,
        amount: int,
        keep_alive: bool,
    ) -> int:
        """Move amount of asset from source to dest.

        Returns:
            The amount actually moved, which may be larger than requested.

        Raises:
            LedgerError: If the transfer cannot be made
        """
        ...


@runtime_checkable
class TransactionalLedger(AssetLedger, Protocol):
    """Asset ledger whose state can be captured and rolled back.

    The engine takes a snapshot before every operation. Snapshots of the
    in-memory ledger copy all balances, so each operation costs time linear
    in the ledger size. Ledgers backed by large stores should return a cheap
    handle instead, such as a journal position or a savepoint.
    """

    def snapshot(self) -> Any:
        """Capture the full ledger state."""
        ...

    def restore(self, snapshot: Any) -> None:
        """Return the ledger to a captured state."""
        ...
