"""Duration parsing for command options."""

import math
import re
from datetime import timedelta
from typing import Union


class DurationNormalizer:
    """Parses durations written the way operators pass them on the command line."""

    UNITS = {
        "ns": 1e-9,
        "us": 1e-6,
        "µs": 1e-6,
        "μs": 1e-6,
        "ms": 1e-3,
        "s": 1.0,
        "m": 60.0,
        "h": 3600.0,
    }

    # Longest units first so "ms" is not read as "m" followed by "s".
    _COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

    @classmethod
    def parse(cls, value: Union[str, int, float, timedelta, None]) -> timedelta:
        """
        Parse a duration.

        Examples:
        - '30s' -> timedelta(seconds=30)
        - '1m30s' -> timedelta(seconds=90)
        - '1.5h' -> timedelta(hours=1.5)
        - '500ms' -> timedelta(milliseconds=500)
        - '45' or 45 -> timedelta(seconds=45)
        - '' or None -> timedelta(0)

        Raises:
            ValueError: If the value is negative, too large, or not a duration.
        """
        if value is None:
            return timedelta(0)
        if isinstance(value, timedelta):
            seconds = value.total_seconds()
        elif isinstance(value, bool):
            raise ValueError(f"not a duration: {value!r}")
        elif isinstance(value, (int, float)):
            seconds = float(value)
        else:
            seconds = cls._parse_text(value.strip())

        if not math.isfinite(seconds):
            raise ValueError(f"not a duration: {value!r}")
        if seconds < 0:
            raise ValueError(f"negative duration: {value!r}")
        try:
            return timedelta(seconds=seconds)
        except OverflowError as e:
            raise ValueError(f"duration out of range: {value!r}") from e

    @classmethod
    def _parse_text(cls, text: str) -> float:
        if text in ("", "0"):
            return 0.0
        try:
            return float(text)
        except ValueError:
            pass

        sign = 1.0
        if text[0] in "+-":
            sign = -1.0 if text[0] == "-" else 1.0
            text = text[1:]

        total = 0.0
        position = 0
        for match in cls._COMPONENT.finditer(text):
            if match.start() != position:
                break
            total += float(match.group(1)) * cls.UNITS[match.group(2)]
            position = match.end()
        if position == 0 or position != len(text):
            raise ValueError(f"invalid duration {text!r}")
        return sign * total
