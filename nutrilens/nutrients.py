"""Parsing of nutrient strings such as "250 kcal" or "12g"."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

_QUANTITY_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*(.*?)\s*$", re.DOTALL)


@dataclass(frozen=True)
class Quantity:
    value: float
    unit: str


def parse_quantity(value: Any) -> Optional[Quantity]:
    """Split a leading numeral from its unit suffix.

    Returns ``None`` when the value does not start with a number. Plain
    numbers are accepted with an empty unit.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        return Quantity(value=float(value), unit="")
    if not isinstance(value, str):
        return None
    m = _QUANTITY_RE.match(value)
    if not m:
        return None
    return Quantity(value=float(m.group(1)), unit=m.group(2))


def leading_int(value: Any, default: int = 0) -> int:
    """Integer part of the leading numeral, or ``default`` when unparsable."""
    quantity = parse_quantity(value)
    if quantity is None:
        return default
    return int(quantity.value)
