"""Unsigned integer parsing for validator indices and range bounds."""

import re


UINT64_MAX = 2**64 - 1

_DECIMAL = re.compile(r"[0-9]+")


class NumberNormalizer:
    """Strict base-10 parsing of unsigned 64-bit integers."""

    @staticmethod
    def parse_uint64(text: str) -> int:
        """
        Parse a base-10 unsigned 64-bit integer.

        Only ASCII digits are accepted: signs, whitespace, underscores and
        non-ASCII digits that ``int()`` would tolerate are rejected.

        Examples:
        - '42' -> 42
        - '007' -> 7
        - '' / '+1' / ' 1' / '1_000' -> ValueError

        Raises:
            ValueError: If the text is not a decimal integer or exceeds 2**64 - 1.
        """
        if not _DECIMAL.fullmatch(text):
            raise ValueError(f"parsing {text!r}: invalid syntax")
        value = int(text)
        if value > UINT64_MAX:
            raise ValueError(f"parsing {text!r}: value out of range")
        return value

    @staticmethod
    def inclusive_range(low: int, high: int) -> range:
        """
        Indices from low to high inclusive; empty when low > high.

        The result is a lazy ``range``: a span as wide as 0-18446744073709551615
        is never materialized, and membership tests stay constant time.
        """
        return range(low, high + 1)
