"""Utility helpers for percentages and rounding."""

from __future__ import annotations

import math
import re
from typing import Optional

_PERCENT_PATTERN = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))\s*%\s*$")


def parse_percentage(value: object) -> Optional[float]:
    """Parse ``"30%"`` into ``30.0``; anything that does not match yields ``None``."""

    if not isinstance(value, str):
        return None
    match = _PERCENT_PATTERN.match(value)
    if match is None:
        return None
    return float(match.group(1))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(min(value, maximum), minimum)


__all__ = ["clamp", "parse_percentage", "round_half_up"]
