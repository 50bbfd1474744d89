"""Wallet and account resolution."""

from .paths import split_account_path, best_public_key
from .store import InMemoryAccountProvider

__all__ = [
    "split_account_path",
    "best_public_key",
    "InMemoryAccountProvider",
]
