"""In-memory wallet store implementing AccountProvider."""

import asyncio
import json
from pathlib import Path
from typing import Iterable, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from ..exceptions import AccountNotFoundError, SnapshotError, WalletNotFoundError
from ..models.account import Account, Wallet
from .paths import split_account_path


_wallet_list = TypeAdapter(list[Wallet])


class InMemoryAccountProvider:
    """Resolves 'wallet/account' paths against wallets held in memory."""

    def __init__(self, wallets: Iterable[Wallet] = ()):
        self._wallets: dict[str, Wallet] = {w.name: w for w in wallets}

    def add_wallet(self, wallet: Wallet) -> None:
        self._wallets[wallet.name] = wallet

    async def wallet_and_account(self, path: str) -> tuple[Wallet, Account]:
        wallet_name, account_name = split_account_path(path)
        await asyncio.sleep(0)

        wallet = self._wallets.get(wallet_name)
        if wallet is None:
            raise WalletNotFoundError(wallet_name)
        account = wallet.account(account_name)
        if account is None:
            raise AccountNotFoundError(wallet_name, account_name)
        return wallet, account

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "InMemoryAccountProvider":
        """
        Load wallets from a JSON file holding a list of wallets.

        Raises:
            SnapshotError: If the file cannot be read or parsed
        """
        path = Path(filepath)
        try:
            with open(path, "r", encoding="utf-8") as f:
                wallets = _wallet_list.validate_python(json.load(f))
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            raise SnapshotError(str(path), str(e)) from e
        return cls(wallets)
