"""Custom exceptions for validator resolution and command input handling.

Resolution errors carry the identifier that failed and, where one exists,
the exception that caused the failure. The cause is available both as
``exc.cause`` and through the normal ``__cause__`` chain.
"""

from typing import Optional, Any


class ResolverException(Exception):
    """Base exception for all resolver errors.

    Attributes:
        message: Human-readable error description
        details: Additional context for debugging
        cause: Underlying exception, if any
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        self.message = message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        text = self.message
        if self.details:
            text = f"{text} (details: {self.details})"
        if self.cause is not None:
            text = f"{text}: {self.cause}"
        return text


# =============================================================================
# Identifier Errors
# =============================================================================

class IdentifierError(ResolverException):
    """Base class for errors tied to a single validator identifier."""

    def __init__(self, identifier: str, message: str,
                 details: Optional[dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        details = details or {}
        details["identifier"] = identifier
        super().__init__(message, details, cause)
        self.identifier = identifier


class MalformedRangeError(IdentifierError):
    """Raised when a range does not split into exactly two bounds."""

    def __init__(self, identifier: str, reason: str = "expected exactly one '-'"):
        super().__init__(
            identifier,
            f"invalid range {identifier}",
            {"reason": reason},
        )
        self.reason = reason


class InvalidRangeBoundError(IdentifierError):
    """Raised when a range bound is not an unsigned 64-bit integer."""

    def __init__(self, identifier: str, bound: str, cause: Optional[BaseException] = None):
        super().__init__(
            identifier,
            f"invalid range {bound}",
            {"bound": bound},
            cause,
        )
        self.bound = bound


class InvalidIndexError(IdentifierError):
    """Raised when a bare identifier is not a validator index."""

    def __init__(self, identifier: str, cause: Optional[BaseException] = None):
        super().__init__(identifier, "failed to parse validator index", cause=cause)


class InvalidPublicKeyError(IdentifierError):
    """Raised when a 0x identifier is not a valid public key."""

    def __init__(self, identifier: str, reason: str,
                 cause: Optional[BaseException] = None):
        super().__init__(
            identifier,
            "failed to parse validator public key",
            {"reason": reason},
            cause,
        )
        self.reason = reason


class AccountResolutionError(IdentifierError):
    """Raised when an account path cannot be turned into a public key."""

    def __init__(self, identifier: str, message: str = "unable to obtain account",
                 cause: Optional[BaseException] = None):
        super().__init__(identifier, message, cause=cause)


class LookupFailedError(IdentifierError):
    """Raised when the validator lookup collaborator fails."""

    def __init__(self, identifier: str, cause: Optional[BaseException] = None):
        super().__init__(
            identifier,
            f"failed to obtain validators {identifier}",
            cause=cause,
        )


class UnknownValidatorError(IdentifierError):
    """Raised when an identifier does not resolve to a validator."""

    def __init__(self, identifier: str, cause: Optional[BaseException] = None):
        super().__init__(identifier, f"unknown validator {identifier}", cause=cause)


# =============================================================================
# Collaborator Errors
# =============================================================================

class ProviderError(ResolverException):
    """Base class for errors raised by shipped collaborator implementations."""
    pass


class StateNotFoundError(ProviderError):
    """Raised when a provider holds no validators for a state identifier."""

    def __init__(self, state_id: str):
        super().__init__(f"unknown state {state_id}", {"state_id": state_id})
        self.state_id = state_id


class SnapshotError(ProviderError):
    """Raised when a validator or wallet snapshot file cannot be loaded."""

    def __init__(self, filepath: str, original_error: str):
        super().__init__(
            f"failed to load snapshot: {filepath}",
            {"filepath": filepath, "error": original_error},
        )
        self.filepath = filepath


class WalletNotFoundError(ProviderError):
    """Raised when a wallet name is unknown."""

    def __init__(self, wallet_name: str):
        super().__init__(f"failed to find wallet {wallet_name}", {"wallet": wallet_name})
        self.wallet_name = wallet_name


class AccountNotFoundError(ProviderError):
    """Raised when an account name is unknown within its wallet."""

    def __init__(self, wallet_name: str, account_name: str):
        super().__init__(
            f"failed to find account {account_name} in wallet {wallet_name}",
            {"wallet": wallet_name, "account": account_name},
        )
        self.wallet_name = wallet_name
        self.account_name = account_name


class InvalidAccountPathError(ProviderError):
    """Raised when an account path has no wallet or account component."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"invalid account path {path}", {"path": path, "reason": reason})
        self.path = path


class NoPublicKeyError(ProviderError):
    """Raised when an account exposes neither a public key nor a composite key."""

    def __init__(self, account_name: str):
        super().__init__(
            f"no public key available for account {account_name}",
            {"account": account_name},
        )


# =============================================================================
# Command Input Errors
# =============================================================================

class InputError(ResolverException):
    """Base class for command input validation errors."""
    pass


class RemoteWalletNotSupportedError(InputError):
    """Raised when an operation is requested against a remote wallet."""

    def __init__(self, remote: str):
        super().__init__(
            "wallet import not available for remote wallets",
            {"remote": remote},
        )
        self.remote = remote


class MissingOptionError(InputError):
    """Raised when a required option has no value."""

    MESSAGES = {
        "shares": "failed to obtain shares",
    }

    def __init__(self, option: str):
        super().__init__(
            self.MESSAGES.get(option, f"{option} is required"),
            {"option": option},
        )
        self.option = option


class InvalidDurationError(InputError):
    """Raised when a duration option cannot be parsed."""

    def __init__(self, option: str, value: Any):
        super().__init__(
            f"invalid duration for {option}: {value!r}",
            {"option": option, "value": str(value)},
        )
        self.option = option
        self.value = value


class InvalidOptionError(InputError):
    """Raised when an option taken from the environment has an unusable value."""

    def __init__(self, option: str, value: Any, reason: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"invalid value for {option}: {reason}",
            {"option": option, "value": str(value)},
            cause,
        )
        self.option = option
        self.value = value
        self.reason = reason


class ImportFileError(InputError):
    """Raised when the wallet import file cannot be read."""

    def __init__(self, filepath: str, cause: Optional[BaseException] = None):
        super().__init__(
            "failed to read wallet import file",
            {"filepath": filepath},
            cause,
        )
        self.filepath = filepath
