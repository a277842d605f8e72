"""Unit tests for query execution."""

from __future__ import annotations

from typing import Iterable, Iterator

import pytest

from core.errors import MalformedRecordError, QueryError, UnknownFieldError
from core.types import OrderBy, Query, ResultSet, Schema, SortDirection
from query.executor import LoggingQueryExecutor, QueryExecutor

_SCHEMA = Schema.of(["id", "name"])
_LINES = ("1,Alice\n", "2,Bob\n", "3,Carol\n")


class _CountingLines:
    """Line source recording how many lines were pulled."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)
        self.pulled = 0

    def __iter__(self) -> Iterator[str]:
        for line in self._lines:
            self.pulled += 1
            yield line


def test_execute_projects_filters_sorts_and_paginates() -> None:
    """Full pipeline should return the first page of filtered sorted names."""
    query = Query(
        fields=("name",),
        conditions={"id": [2, 3]},
        order=OrderBy("name", SortDirection.ASC),
        limit=1,
        page=1,
    )

    result = QueryExecutor().execute(_SCHEMA, _LINES, query)

    assert result.to_dicts() == [{"name": "Bob"}]


def test_execute_orders_descending_without_limit() -> None:
    """DESC order without limit should return every matching record."""
    query = Query(fields=("name",), conditions={"id": [2, 3]}, order=("name", "DESC"))

    result = QueryExecutor().execute(_SCHEMA, _LINES, query)

    assert result.to_dicts() == [{"name": "Carol"}, {"name": "Bob"}]


def test_execute_empty_query_returns_all_records_in_source_order() -> None:
    """An empty query should return every record unchanged."""
    result = QueryExecutor().execute(_SCHEMA, _LINES, Query())

    assert [record["id"] for record in result] == ["1", "2", "3"]


def test_execute_projection_uses_schema_order() -> None:
    """Projected keys should follow schema order, not request order."""
    result = QueryExecutor().execute(_SCHEMA, _LINES, Query(fields=("name", "id")))

    assert list(result[0].keys()) == ["id", "name"]


def test_execute_filters_on_fields_outside_projection() -> None:
    """Conditions may reference fields that are not projected."""
    query = Query(fields=("name",), conditions={"id": ["1"]})

    result = QueryExecutor().execute(_SCHEMA, _LINES, query)

    assert result.to_dicts() == [{"name": "Alice"}]


def test_execute_orders_on_fields_outside_projection() -> None:
    """Sort keys may reference fields that are not projected."""
    lines = ("3,Carol\n", "1,Alice\n", "2,Bob\n")
    executor = QueryExecutor()

    ascending = executor.execute(_SCHEMA, lines, Query(fields=("name",), order=OrderBy("id")))
    descending = executor.execute(
        _SCHEMA, lines, Query(fields=("name",), order=OrderBy("id", SortDirection.DESC))
    )

    assert ascending.to_dicts() == [{"name": "Alice"}, {"name": "Bob"}, {"name": "Carol"}]
    assert descending.to_dicts() == [{"name": "Carol"}, {"name": "Bob"}, {"name": "Alice"}]
    assert all(set(record) == {"name"} for record in ascending)


def test_execute_paginates_before_projecting_sort_field_away() -> None:
    """Pages of a sort on an unprojected field should hold only projected keys."""
    lines = ("3,Carol\n", "1,Alice\n", "2,Bob\n")
    query = Query(fields=("name",), order=OrderBy("id"), limit=2, page=2)

    result = QueryExecutor().execute(_SCHEMA, lines, query)

    assert [list(record.keys()) for record in result] == [["name"]]
    assert result.to_dicts() == [{"name": "Carol"}]


def test_execute_returns_empty_result_when_nothing_matches() -> None:
    """No matches should produce an empty result set, not an error."""
    result = QueryExecutor().execute(_SCHEMA, _LINES, Query(conditions={"id": ["9"]}))

    assert result == ResultSet()


def test_execute_unknown_field_reads_no_lines() -> None:
    """Unknown projection fields should fail before any line is pulled."""
    lines = _CountingLines(_LINES)

    with pytest.raises(UnknownFieldError) as error_info:
        QueryExecutor().execute(_SCHEMA, lines, Query(fields=("email",)))

    assert (error_info.value.field, lines.pulled) == ("email", 0)


def test_execute_unknown_order_field_reads_no_lines() -> None:
    """Unknown order fields should fail before any line is pulled."""
    lines = _CountingLines(_LINES)

    with pytest.raises(UnknownFieldError):
        QueryExecutor().execute(_SCHEMA, lines, Query(order=OrderBy("age")))

    assert lines.pulled == 0


def test_execute_unknown_condition_field_raises() -> None:
    """Unknown condition fields should be rejected up front."""
    with pytest.raises(UnknownFieldError):
        QueryExecutor().execute(_SCHEMA, _LINES, Query(conditions={"age": ["3"]}))


def test_execute_malformed_line_aborts_with_its_index() -> None:
    """A malformed line anywhere should abort with its zero-based index."""
    lines = ("1,Alice", "2,Bob", "4", "3,Carol")

    with pytest.raises(MalformedRecordError) as error_info:
        QueryExecutor().execute(_SCHEMA, lines, Query(conditions={"id": ["1"]}))

    assert error_info.value.line_number == 2


def test_execute_skips_blank_lines_but_keeps_numbering() -> None:
    """Blank lines should be ignored while later lines keep their index."""
    lines = ("1,Alice\n", "\n", "broken\n")

    with pytest.raises(MalformedRecordError) as error_info:
        QueryExecutor().execute(_SCHEMA, lines, Query())

    assert error_info.value.line_number == 2


def test_execute_rejects_blank_lines_when_not_skipping() -> None:
    """Blank lines should be malformed when skipping is disabled."""
    with pytest.raises(MalformedRecordError):
        QueryExecutor(skip_blank_lines=False).execute(_SCHEMA, ("1,Alice\n", "\n"), Query())


def test_execute_uses_configured_delimiter() -> None:
    """Executor should split lines with its delimiter."""
    result = QueryExecutor(delimiter=";").execute(_SCHEMA, ("5;Eve",), Query())

    assert result.to_dicts() == [{"id": "5", "name": "Eve"}]


def test_execute_sorts_numeric_field_numerically() -> None:
    """Numeric sort keys should order by value."""
    lines = ("10,a", "9,b", "100,c")

    result = QueryExecutor().execute(_SCHEMA, lines, Query(order=("id", "ASC")))

    assert [record["id"] for record in result] == ["9", "10", "100"]


def test_logging_executor_delegates_result() -> None:
    """Logging wrapper should return the inner executor result unchanged."""
    executor = LoggingQueryExecutor(QueryExecutor(), source="people")

    result = executor.execute(_SCHEMA, _LINES, Query(limit=2))

    assert len(result) == 2


def test_logging_executor_reraises_query_errors() -> None:
    """Logging wrapper should propagate pipeline errors."""
    executor = LoggingQueryExecutor(QueryExecutor(), source="people")

    with pytest.raises(QueryError):
        executor.execute(_SCHEMA, ("1",), Query())
