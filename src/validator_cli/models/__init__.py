"""Data models for validators, wallets and identifiers."""

from .validator import Validator, FAR_FUTURE_EPOCH
from .account import Account, Wallet
from .enums import IdentifierKind, ValidatorStatus

__all__ = [
    "Validator",
    "FAR_FUTURE_EPOCH",
    "Account",
    "Wallet",
    "IdentifierKind",
    "ValidatorStatus",
]
