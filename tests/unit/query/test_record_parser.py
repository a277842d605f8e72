"""Unit tests for delimited line parsing."""

from __future__ import annotations

import pytest

from core.errors import MalformedRecordError, QueryError
from core.types import Schema
from query.record_parser import is_blank_line, parse_record, split_line


def test_parse_record_maps_tokens_to_schema_fields() -> None:
    """Tokens should be zipped positionally with schema names."""
    record = parse_record("1,Alice\n", 0, Schema.of(["id", "name"]))

    assert dict(record) == {"id": "1", "name": "Alice"}


def test_parse_record_uses_configured_delimiter() -> None:
    """A custom delimiter should split tokens."""
    record = parse_record("7|Dana|dev", 3, Schema.of(["id", "name", "role"]), delimiter="|")

    assert record["role"] == "dev"


def test_parse_record_keeps_quoted_delimiters() -> None:
    """Quoted tokens may contain the delimiter."""
    record = parse_record('4,"Smith, Jane"\r\n', 0, Schema.of(["id", "name"]))

    assert record["name"] == "Smith, Jane"


def test_parse_record_rejects_short_line_with_line_number() -> None:
    """A line with too few tokens should report its line number."""
    with pytest.raises(MalformedRecordError) as error_info:
        parse_record("4", 3, Schema.of(["id", "name"]))

    assert (error_info.value.line_number, error_info.value.actual) == (3, 1)


def test_parse_record_rejects_long_line() -> None:
    """Extra tokens should not be silently truncated."""
    with pytest.raises(QueryError):
        parse_record("1,Alice,extra", 0, Schema.of(["id", "name"]))


def test_parse_record_is_read_only() -> None:
    """Parsed records should not accept mutation."""
    record = parse_record("1,Alice", 0, Schema.of(["id", "name"]))

    with pytest.raises(TypeError):
        record["name"] = "Eve"  # type: ignore[index]


def test_split_line_returns_single_empty_token_for_empty_line() -> None:
    """An empty line should count as one empty token."""
    assert split_line("\n") == [""]


def test_is_blank_line_detects_terminator_only_lines() -> None:
    """Only terminator characters should make a line blank."""
    assert (is_blank_line("\r\n"), is_blank_line(" \n")) == (True, False)
