"""Single-key record ordering.

This module orders records by one field, comparing numerically when both
values are numeric and by code point otherwise. Sorting is stable in
both directions.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable

from core.types import Record, Scalar, SortDirection
from query.numeric import as_number


def compare_values(left: Scalar, right: Scalar) -> int:
    """Three-way compare two scalars.

    Returns:
        Negative, zero, or positive like a classic comparator.
    """
    left_number = as_number(left)
    right_number = as_number(right)
    if left_number is not None and right_number is not None:
        return (left_number > right_number) - (left_number < right_number)
    left_text = str(left)
    right_text = str(right)
    return (left_text > right_text) - (left_text < right_text)


def sort_records(
    records: Iterable[Record],
    field: str,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Record]:
    """Return records ordered by one field.

    DESC is the exact reversal of ASC, so equal values keep comparing equal
    and retain their input order.

    Args:
        records: Records to order; left untouched.
        field: Sort field present in every record.
        direction: ASC or DESC.

    Returns:
        New ordered list.
    """
    resolved = SortDirection.parse(direction)
    sort_key = cmp_to_key(lambda left, right: compare_values(left[field], right[field]))
    return sorted(records, key=sort_key, reverse=resolved is SortDirection.DESC)
