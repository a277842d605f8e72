"""Offset/limit slicing of ordered records."""

from __future__ import annotations

from typing import Sequence

from core.constants import DEFAULT_PAGE
from core.errors import InvalidQueryError
from core.types import Record


def paginate(
    records: Sequence[Record],
    limit: int | None = None,
    page: int | None = None,
) -> list[Record]:
    """Slice one page out of already filtered and sorted records.

    Args:
        records: Ordered records.
        limit: Optional page size; when absent every record is returned.
        page: Optional one-based page number; absent or non-positive means 1.

    Returns:
        Records in ``[(page - 1) * limit, page * limit)`` clipped to the input.

    Raises:
        InvalidQueryError: If limit is not positive.
    """
    if limit is None:
        return list(records)
    if limit < 1:
        raise InvalidQueryError(f"Invalid limit {limit}: expected a positive integer.")
    if page is None or page < 1:
        page = DEFAULT_PAGE
    offset = (page - 1) * limit
    return list(records[offset : offset + limit])
