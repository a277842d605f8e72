"""Unit tests for schema field validation."""

from __future__ import annotations

import pytest

from core.errors import UnknownFieldError
from core.types import Schema
from query.schema_validation import validate_fields


def test_validate_fields_accepts_known_fields() -> None:
    """Known fields should pass without error."""
    schema = Schema.of(["id", "name"])

    validate_fields(("name", "id"), schema)

    assert "name" in schema


def test_validate_fields_reports_first_unknown_in_request_order() -> None:
    """The first unknown field in request order should be reported."""
    schema = Schema.of(["id", "name"])

    with pytest.raises(UnknownFieldError) as error_info:
        validate_fields(("zeta", "name", "alpha"), schema)

    assert error_info.value.field == "zeta"


def test_validate_fields_reports_sorted_first_for_sets() -> None:
    """Unordered requests should report the smallest unknown name."""
    schema = Schema.of(["id"])

    with pytest.raises(UnknownFieldError) as error_info:
        validate_fields({"zeta", "alpha", "id"}, schema)

    assert error_info.value.field == "alpha"


def test_unknown_field_error_message_names_field() -> None:
    """Error text should carry the unknown field name."""
    error = UnknownFieldError("email")

    assert "Unknown field 'email'" in str(error)
