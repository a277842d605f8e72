"""Numeric interpretation of scalar values.

A value is numeric when it is an int or float (bools excluded) or a string
holding a plain decimal literal with optional sign, fraction, exponent and
surrounding whitespace. ``nan``, ``inf``, hex, and digit separators are not
numeric.
"""

from __future__ import annotations

from decimal import Decimal
import math
import re

from core.types import Scalar

_NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def as_number(value: Scalar) -> Decimal | None:
    """Return the exact numeric value of a scalar, or None if not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(value) if math.isfinite(value) else None
    if isinstance(value, str) and _NUMERIC_PATTERN.match(value):
        return Decimal(value.strip())
    return None
