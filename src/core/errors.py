"""flatquery exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class FlatQueryError(Exception):
    """Base exception for all flatquery failures."""


class ConfigurationError(FlatQueryError):
    """Raised for invalid storage path, access mode, or runtime configuration."""


class SchemaError(FlatQueryError):
    """Raised for invalid schema declarations."""


class EmptySchemaError(SchemaError):
    """Raised when no fields are declared for a source."""


class SourceNotFoundError(FlatQueryError):
    """Raised when a table file does not exist."""


class QueryFileError(FlatQueryError):
    """Raised for invalid or unreadable YAML query files."""


class QueryError(FlatQueryError):
    """Raised for failures surfaced while executing a query."""


class InvalidQueryError(QueryError):
    """Raised when a query descriptor violates its own constraints."""


class UnknownFieldError(QueryError):
    """Raised when a referenced field is absent from the schema.

    Attributes:
        field: The first unknown field name found.
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f"Unknown field '{field}' in field list. "
            "Reference only fields declared in the source schema."
        )


class MalformedRecordError(QueryError):
    """Raised when a line does not split into one token per schema field.

    Attributes:
        line_number: Zero-based line position in the source.
        expected: Number of schema fields.
        actual: Number of tokens found on the line.
    """

    def __init__(self, line_number: int, expected: int, actual: int) -> None:
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Malformed record at line {line_number}: "
            f"expected {expected} fields, got {actual}. Fix the line and retry."
        )
