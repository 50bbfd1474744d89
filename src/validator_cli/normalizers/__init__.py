"""Text normalization utilities for identifiers and options."""

from .numbers import NumberNormalizer, UINT64_MAX
from .hexbytes import HexNormalizer, PUBLIC_KEY_LENGTH
from .duration import DurationNormalizer

__all__ = [
    "NumberNormalizer",
    "UINT64_MAX",
    "HexNormalizer",
    "PUBLIC_KEY_LENGTH",
    "DurationNormalizer",
]
