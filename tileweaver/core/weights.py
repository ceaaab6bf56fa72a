"""Weight codec for tile records.

Weights are stored as a "P,S" string: a primary selection weight and a
secondary component. The editor only ever writes the primary and emits
"P,0" on every edit.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from .errors import FormatError

DEFAULT_WEIGHT = "1,0"


class Weight(NamedTuple):
    """A parsed (primary, secondary) weight pair."""

    primary: int
    secondary: int


def _parse_component(text: str, raw: str) -> int:
    text = text.strip()
    try:
        number = float(text)
    except ValueError:
        raise FormatError(f"Invalid weight component {text!r} in {raw!r}", value=raw) from None
    if not math.isfinite(number):
        raise FormatError(f"Invalid weight component {text!r} in {raw!r}", value=raw)
    return round(number)


def parse_weight(text: str) -> Weight:
    """Parse a "P,S" weight string.

    The secondary component is optional and defaults to 0. Decimal
    components are rounded to the nearest integer (half to even).

    Raises:
        FormatError: If either component is not a finite number
    """
    if text is None:
        raise FormatError("Weight is missing", value=text)

    parts = text.split(",")
    if len(parts) > 2:
        raise FormatError(f"Too many weight components in {text!r}", value=text)

    primary = _parse_component(parts[0], text)
    secondary = _parse_component(parts[1], text) if len(parts) == 2 else 0
    return Weight(primary, secondary)


def parse_primary(text: str) -> int:
    """Parse only the primary component of a weight string."""
    return parse_weight(text).primary


def format_weight(primary: int) -> str:
    """Format an edited weight. The secondary component is always written as 0."""
    return f"{primary},0"
