"""Query execution orchestration.

This module composes validation, parsing, filtering, projection,
sorting, and pagination into one deterministic pass over a line source.
Cross-cutting behavior wraps an executor instead of subclassing it.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from core.constants import DEFAULT_DELIMITER
from core.errors import QueryError
from core.logging_config import get_logger
from core.types import Query, Record, ResultSet, Schema, make_record
from query.condition_filter import compile_conditions, matches
from query.pagination import paginate
from query.record_parser import is_blank_line, parse_record
from query.schema_validation import validate_fields
from query.sorting import sort_records

_LOGGER = get_logger(__name__)


class Executor(Protocol):
    """Anything able to run a query against a schema and line source."""

    def execute(self, schema: Schema, lines: Iterable[str], query: Query) -> ResultSet:
        """Run a query and return its result set."""
        ...


class QueryExecutor:
    """Single-pass query pipeline over raw delimited lines."""

    def __init__(
        self,
        delimiter: str = DEFAULT_DELIMITER,
        skip_blank_lines: bool = True,
    ) -> None:
        """Create an executor.

        Args:
            delimiter: Single-character field delimiter.
            skip_blank_lines: Ignore empty lines while keeping line numbering.
        """
        self._delimiter = delimiter
        self._skip_blank_lines = skip_blank_lines

    def execute(self, schema: Schema, lines: Iterable[str], query: Query) -> ResultSet:
        """Execute a query against raw lines.

        Every referenced field is validated before the first line is pulled
        from ``lines``. A malformed line aborts the whole execution.

        Args:
            schema: Declared source schema.
            lines: Raw lines in source order; numbered from zero.
            query: Query descriptor.

        Returns:
            Ordered result set, empty when nothing matched.

        Raises:
            UnknownFieldError: If a referenced field is not in the schema.
            MalformedRecordError: If a line does not match the schema arity.
        """
        _validate_query(schema, query)
        kept = self._collect_records(schema, lines, query)
        if query.order is not None:
            kept = sort_records(kept, query.order.field, query.order.direction)
        page = paginate(kept, query.limit, query.page)
        projection = _projection_fields(schema, query)
        if projection is not None:
            page = [_project(record, projection) for record in page]
        return ResultSet(records=tuple(page))

    def _collect_records(
        self,
        schema: Schema,
        lines: Iterable[str],
        query: Query,
    ) -> list[Record]:
        conditions = compile_conditions(query.conditions)
        kept: list[Record] = []
        for line_number, line in enumerate(lines):
            if self._skip_blank_lines and is_blank_line(line):
                continue
            record = parse_record(line, line_number, schema, self._delimiter)
            if not matches(record, conditions):
                continue
            kept.append(record)
        return kept


class LoggingQueryExecutor:
    """Executor wrapper emitting structured start, completion, and failure events."""

    def __init__(self, inner: Executor, source: str | None = None) -> None:
        self._inner = inner
        self._source = source

    def execute(self, schema: Schema, lines: Iterable[str], query: Query) -> ResultSet:
        """Delegate to the wrapped executor and log the outcome."""
        _LOGGER.debug(
            "query_started",
            source=self._source,
            fields=list(query.fields),
            condition_fields=sorted(query.conditions),
            order=query.order.field if query.order else None,
            limit=query.limit,
            page=query.page,
        )
        try:
            result = self._inner.execute(schema, lines, query)
        except QueryError as error:
            _LOGGER.error(
                "query_failed",
                source=self._source,
                error_type=type(error).__name__,
                error=str(error),
            )
            raise
        _LOGGER.info("query_completed", source=self._source, record_count=len(result))
        return result


def _validate_query(schema: Schema, query: Query) -> None:
    if query.fields:
        validate_fields(query.fields, schema)
    if query.order is not None:
        validate_fields((query.order.field,), schema)
    if query.conditions:
        validate_fields(tuple(query.conditions), schema)


def _project(record: Record, projection: tuple[str, ...]) -> Record:
    return make_record((name, record[name]) for name in projection)


def _projection_fields(schema: Schema, query: Query) -> tuple[str, ...] | None:
    """Return requested fields in schema order, or None to keep all."""
    if not query.fields:
        return None
    requested = set(query.fields)
    return tuple(name for name in schema if name in requested)
