"""Typed YAML query descriptor loading.

This module loads and validates query files used by the CLI ``run``
command. A query file names the table, declares its schema, and
describes projection, conditions, order, and pagination.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence, cast

import yaml

from core.constants import QUERY_FILE_VERSION
from core.errors import FlatQueryError, QueryFileError
from core.types import OrderBy, Query, Scalar, Schema

_ROOT_KEYS = {"version", "source", "schema", "query"}
_QUERY_KEYS = {"fields", "conditions", "order", "limit", "page"}
_ORDER_KEYS = {"field", "direction"}


@dataclass(frozen=True)
class QueryFile:
    """Validated query file contents."""

    source: str
    schema: Schema
    query: Query


def load_query_file(query_path: str) -> QueryFile:
    """Load and validate a YAML query file from disk.

    Args:
        query_path: File path to YAML query descriptor.

    Returns:
        Fully validated query file.

    Raises:
        QueryFileError: If the file is unreadable or fails schema checks.
    """
    payload = _load_yaml_payload(query_path)
    root_mapping = _expect_mapping(payload, "query file root")
    _validate_keys(root_mapping, _ROOT_KEYS, "query file root")
    _parse_version(root_mapping)
    source = _require_string(root_mapping, "source")
    try:
        schema = Schema.of(_expect_string_list(root_mapping.get("schema"), "schema"))
        query = _parse_query(root_mapping.get("query"))
    except QueryFileError:
        raise
    except FlatQueryError as error:
        raise QueryFileError(f"Invalid query file {query_path}: {error}") from error
    return QueryFile(source=source, schema=schema, query=query)


def _load_yaml_payload(query_path: str) -> object:
    query_file = Path(query_path).expanduser().resolve()
    if not query_file.exists():
        raise QueryFileError(
            f"Query file does not exist at {query_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(query_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise QueryFileError(
            f"Failed to read query file at {query_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise QueryFileError(
            f"Failed to parse YAML query file at {query_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise QueryFileError(f"Query file at {query_file} is empty. Define 'source' and 'schema'.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise QueryFileError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
        return cast(Mapping[str, object], value)
    raise QueryFileError(f"Invalid {context}: expected object mapping, got {type(value).__name__}.")


def _expect_string_list(value: object, context: str) -> tuple[str, ...]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise QueryFileError(f"Invalid {context}: expected list of field names.")
    names = []
    for item in value:
        if not isinstance(item, str):
            raise QueryFileError(f"Invalid {context}: field names must be strings, got {item!r}.")
        names.append(item)
    return tuple(names)


def _parse_version(root_mapping: Mapping[str, object]) -> None:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise QueryFileError(
            f"Query file field 'version' must be an integer. Set version: {QUERY_FILE_VERSION}."
        )
    if raw_version != QUERY_FILE_VERSION:
        raise QueryFileError(
            f"Unsupported query file version {raw_version}. Use version: {QUERY_FILE_VERSION}."
        )


def _require_string(mapping: Mapping[str, object], field_name: str) -> str:
    raw_value = mapping.get(field_name)
    if isinstance(raw_value, str) and raw_value.strip():
        return raw_value.strip()
    raise QueryFileError(f"Query file field '{field_name}' must be a non-empty string.")


def _parse_query(raw_query: object) -> Query:
    if raw_query is None:
        return Query()
    query_mapping = _expect_mapping(raw_query, "query")
    _validate_keys(query_mapping, _QUERY_KEYS, "query")
    fields: tuple[str, ...] = ()
    if query_mapping.get("fields") is not None:
        fields = _expect_string_list(query_mapping["fields"], "query fields")
    return Query(
        fields=fields,
        conditions=_parse_conditions(query_mapping.get("conditions")),
        order=_parse_order(query_mapping.get("order")),
        limit=_optional_int(query_mapping, "limit"),
        page=_optional_int(query_mapping, "page"),
    )


def _parse_conditions(raw_conditions: object) -> dict[str, tuple[Scalar, ...]]:
    if raw_conditions is None:
        return {}
    conditions_mapping = _expect_mapping(raw_conditions, "query conditions")
    conditions: dict[str, tuple[Scalar, ...]] = {}
    for name, raw_values in conditions_mapping.items():
        if isinstance(raw_values, Sequence) and not isinstance(raw_values, str):
            values = tuple(raw_values)
        else:
            values = (raw_values,)
        for value in values:
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise QueryFileError(
                    f"Invalid value {value!r} for condition '{name}': expected string or number."
                )
        conditions[name] = cast(tuple[Scalar, ...], values)
    return conditions


def _parse_order(raw_order: object) -> OrderBy | None:
    if raw_order is None:
        return None
    if isinstance(raw_order, str):
        return OrderBy(field=raw_order)
    order_mapping = _expect_mapping(raw_order, "query order")
    _validate_keys(order_mapping, _ORDER_KEYS, "query order")
    field_name = _require_string(order_mapping, "field")
    direction = order_mapping.get("direction", "ASC")
    if not isinstance(direction, str):
        raise QueryFileError("Query order field 'direction' must be ASC or DESC.")
    return OrderBy(field=field_name, direction=direction)


def _optional_int(mapping: Mapping[str, object], field_name: str) -> int | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, int) and not isinstance(raw_value, bool):
        return raw_value
    raise QueryFileError(f"Query field '{field_name}' must be an integer when provided.")


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise QueryFileError(f"Invalid {context}: unknown fields {', '.join(unknown_keys)}.")
