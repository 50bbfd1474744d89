"""Wallet command input handling."""

from .shared_import import ImportEnvironment, ImportInput, gather_input, merge_options

__all__ = [
    "ImportEnvironment",
    "ImportInput",
    "gather_input",
    "merge_options",
]
