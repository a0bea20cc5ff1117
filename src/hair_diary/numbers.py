"""Lenient numeric parsing for form and stored values."""

import math
import re

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int(value: object) -> int | None:
    """Parse the leading integer of a value, or None when there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(1)) if match else None
    return None


def parse_float(value: object) -> float | None:
    """Parse the leading decimal of a value, or None when there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        return float(match.group(1)) if match else None
    return None


def int_or_zero(value: object) -> int:
    """Parse an integer, defaulting to 0."""
    return parse_int(value) or 0


def float_or_zero(value: object) -> float:
    """Parse a decimal, defaulting to 0."""
    return parse_float(value) or 0.0


def optional_float(value: object) -> float | None:
    """Parse a decimal, mapping blank or unparsable input to None."""
    if value is None or value == "":
        return None
    return parse_float(value)
