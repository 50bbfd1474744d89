"""
Collaborator interfaces used by the resolver.

The resolver depends only on these protocols, so any beacon node client,
cache or test double that provides the two lookups can be plugged in.
Both lookups are coroutines: cancelling the awaiting task cancels the
lookup.
"""

from typing import Mapping, Protocol, Sequence, runtime_checkable

from ..models.account import Account, Wallet
from ..models.validator import Validator


@runtime_checkable
class ValidatorsProvider(Protocol):
    """
    Validator-state lookup.

    Both methods return a mapping from validator index to record containing
    only the validators that were found. Missing validators are not an error.
    """

    async def validators(
        self, state_id: str, indices: Sequence[int]
    ) -> Mapping[int, Validator]:
        """
        Look up validators by index.

        Args:
            state_id: Opaque state identifier (head, finalized, slot, root)
            indices: Validator indices to look up; ranges arrive as a lazy
                ``range`` that may be far wider than the validator set

        Returns:
            Found validators keyed by index

        Raises:
            Exception: Any failure to reach or read the underlying state
        """
        ...

    async def validators_by_pubkey(
        self, state_id: str, pubkeys: Sequence[bytes]
    ) -> Mapping[int, Validator]:
        """
        Look up validators by 48-byte public key.

        Args:
            state_id: Opaque state identifier
            pubkeys: Public keys to look up

        Returns:
            Found validators keyed by index
        """
        ...


@runtime_checkable
class AccountProvider(Protocol):
    """Wallet and account resolution for 'wallet/account' paths."""

    async def wallet_and_account(self, path: str) -> tuple[Wallet, Account]:
        """
        Resolve an account path.

        Raises:
            Exception: If the wallet or the account cannot be found
        """
        ...
