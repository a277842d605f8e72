"""Delimited line decoding.

This module maps one raw text line to a named record using the
positional order of the schema fields.
"""

from __future__ import annotations

import csv

from core.constants import DEFAULT_DELIMITER, LINE_TERMINATORS
from core.errors import MalformedRecordError
from core.types import Record, Schema, make_record


def parse_record(
    line: str,
    line_number: int,
    schema: Schema,
    delimiter: str = DEFAULT_DELIMITER,
) -> Record:
    """Parse a raw line into a record.

    Args:
        line: Raw text line, with or without its terminator.
        line_number: Position of the line in the source, reported on error.
        schema: Declared source schema.
        delimiter: Single-character field delimiter.

    Returns:
        Record keyed by schema field names.

    Raises:
        MalformedRecordError: If the token count differs from the schema size.
    """
    tokens = split_line(line, delimiter)
    if len(tokens) != len(schema):
        raise MalformedRecordError(line_number, expected=len(schema), actual=len(tokens))
    return make_record(zip(schema.fields, tokens))


def split_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> list[str]:
    """Split one line into tokens, honoring quoted tokens."""
    stripped = line.rstrip(LINE_TERMINATORS)
    if not stripped:
        return [""]
    return next(csv.reader([stripped], delimiter=delimiter))


def is_blank_line(line: str) -> bool:
    """Return whether a line is empty once its terminator is removed."""
    return not line.rstrip(LINE_TERMINATORS)
