"""Enumeration types for identifiers and validator state."""

from enum import Enum


class IdentifierKind(Enum):
    """Syntactic shape of a user-supplied validator identifier."""

    RANGE = "range"
    PUBLIC_KEY = "public_key"
    ACCOUNT = "account"
    INDEX = "index"

    @classmethod
    def classify(cls, identifier: str, allow_range: bool = True) -> "IdentifierKind":
        """Classify an identifier; the first matching rule wins.

        Any identifier containing '-' is a range, including account paths
        such as 'my-wallet/1'.
        """
        if allow_range and "-" in identifier:
            return cls.RANGE
        if identifier.startswith("0x"):
            return cls.PUBLIC_KEY
        if "/" in identifier:
            return cls.ACCOUNT
        return cls.INDEX


class ValidatorStatus(Enum):
    """Validator status as reported by beacon nodes."""

    PENDING_INITIALIZED = "pending_initialized"
    PENDING_QUEUED = "pending_queued"
    ACTIVE_ONGOING = "active_ongoing"
    ACTIVE_EXITING = "active_exiting"
    ACTIVE_SLASHED = "active_slashed"
    EXITED_UNSLASHED = "exited_unslashed"
    EXITED_SLASHED = "exited_slashed"
    WITHDRAWAL_POSSIBLE = "withdrawal_possible"
    WITHDRAWAL_DONE = "withdrawal_done"

    @property
    def is_active(self) -> bool:
        return self.value.startswith("active_")
