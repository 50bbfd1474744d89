"""
validator-cli

Resolves validator identifiers (indices, public keys, wallet/account paths
and index ranges) to validator records, and validates wallet import input.
"""

from .resolver import ValidatorResolver
from .models.validator import Validator
from .models.account import Account, Wallet
from .providers.interface import ValidatorsProvider, AccountProvider
from .providers.memory import InMemoryValidatorsProvider
from .accounts.store import InMemoryAccountProvider
from .accounts.paths import best_public_key
from .wallet.shared_import import ImportInput, gather_input
from .exceptions import (
    ResolverException,
    MalformedRangeError,
    InvalidRangeBoundError,
    InvalidIndexError,
    InvalidPublicKeyError,
    AccountResolutionError,
    LookupFailedError,
    UnknownValidatorError,
    InputError,
    MissingOptionError,
    InvalidOptionError,
    RemoteWalletNotSupportedError,
    ImportFileError,
)
from .logging import (
    configure_logging,
    get_logger,
    ResolverLogger,
)

__version__ = "0.3.0"
__all__ = [
    "ValidatorResolver",
    "Validator",
    "Account",
    "Wallet",
    "ValidatorsProvider",
    "AccountProvider",
    "InMemoryValidatorsProvider",
    "InMemoryAccountProvider",
    "best_public_key",
    "ImportInput",
    "gather_input",
    # Exceptions
    "ResolverException",
    "MalformedRangeError",
    "InvalidRangeBoundError",
    "InvalidIndexError",
    "InvalidPublicKeyError",
    "AccountResolutionError",
    "LookupFailedError",
    "UnknownValidatorError",
    "InputError",
    "MissingOptionError",
    "InvalidOptionError",
    "RemoteWalletNotSupportedError",
    "ImportFileError",
    # Logging
    "configure_logging",
    "get_logger",
    "ResolverLogger",
]
