"""Quantity parsing utilities."""

import re
from typing import Any

DEFAULT_QUANTITY = 1


def parse_quantity(value: Any) -> int:
    """Parse a quantity into a positive integer.

    Parsing is tolerant: the leading integer of a string is used the way a
    form field would read it ("3 boxes" -> 3), and anything that does not
    yield a positive integer falls back to 1 instead of raising.

    Handles:
    - 5, "5", " 5 "
    - "2.7" (truncated to 2)
    - "", None, "abc", 0, -3 (all become 1)

    Args:
        value: Raw quantity value from user input or persisted data

    Returns:
        Positive integer quantity
    """
    if isinstance(value, bool) or value is None:
        return DEFAULT_QUANTITY

    if isinstance(value, int):
        quantity = value
    elif isinstance(value, float):
        quantity = int(value) if value == value and abs(value) != float("inf") else 0
    else:
        match = re.match(r"\s*([+-]?\d+)", str(value))
        if match is None:
            return DEFAULT_QUANTITY
        quantity = int(match.group(1))

    if quantity <= 0:
        return DEFAULT_QUANTITY
    return quantity
