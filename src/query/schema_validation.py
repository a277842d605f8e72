"""Schema-aware field validation.

This module confirms that every field a query references is declared
in the schema before any line of the source is read.
"""

from __future__ import annotations

from typing import Iterable

from core.errors import UnknownFieldError
from core.types import Schema


def validate_fields(requested: Iterable[str], schema: Schema) -> None:
    """Fail on the first requested field missing from the schema.

    Sequences are checked in their own order and sets in sorted order,
    so the reported field is reproducible for the same inputs.

    Args:
        requested: Field names referenced by a query.
        schema: Declared source schema.

    Raises:
        UnknownFieldError: If any requested field is not in the schema.
    """
    if isinstance(requested, (set, frozenset)):
        requested = sorted(requested)
    for name in requested:
        if name not in schema:
            raise UnknownFieldError(name)
