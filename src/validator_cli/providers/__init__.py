"""Validator-state and account collaborators."""

from .interface import ValidatorsProvider, AccountProvider
from .memory import InMemoryValidatorsProvider

__all__ = [
    "ValidatorsProvider",
    "AccountProvider",
    "InMemoryValidatorsProvider",
]
