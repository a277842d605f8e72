"""Shared typed models.

This module defines immutable data models used by the query pipeline,
the file data source, and the CLI to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Sequence, Union

from core.errors import EmptySchemaError, InvalidQueryError, SchemaError

Scalar = Union[str, int, float]
Record = Mapping[str, Scalar]


def make_record(pairs: Iterable[tuple[str, Scalar]]) -> Record:
    """Build a read-only record from ``(field, value)`` pairs."""
    return MappingProxyType(dict(pairs))


@dataclass(frozen=True)
class Schema:
    """Ordered field names defining positional decoding of a line.

    Attributes:
        fields: Field names in token order.
    """

    fields: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.fields:
            raise EmptySchemaError(
                "The schema must declare at least one field. "
                "Define the fields of the source before querying it."
            )
        seen: set[str] = set()
        for name in self.fields:
            if not isinstance(name, str) or not name:
                raise SchemaError(f"Invalid schema field name {name!r}: expected non-empty string.")
            if name in seen:
                raise SchemaError(f"Duplicate schema field '{name}'. Field names must be unique.")
            seen.add(name)

    @classmethod
    def of(cls, names: Sequence[str] | "Schema") -> "Schema":
        """Build a schema from a sequence of names or return it unchanged."""
        if isinstance(names, Schema):
            return names
        if isinstance(names, str):
            raise SchemaError(
                f"Invalid schema {names!r}: expected a sequence of field names, got a string."
            )
        return cls(fields=tuple(names))

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def index(self, name: str) -> int:
        """Return the positional index of a field."""
        return self.fields.index(name)


class SortDirection(str, Enum):
    """Sort direction for the single order key."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: "SortDirection | str") -> "SortDirection":
        """Parse a direction case-insensitively.

        Raises:
            InvalidQueryError: If value is not ASC or DESC.
        """
        if isinstance(value, SortDirection):
            return value
        normalized = str(value).strip().upper()
        try:
            return cls(normalized)
        except ValueError as error:
            raise InvalidQueryError(
                f"Invalid sort direction '{value}': expected ASC or DESC."
            ) from error


@dataclass(frozen=True)
class OrderBy:
    """Single sort key.

    Attributes:
        field: Field to sort by.
        direction: ASC or DESC.
    """

    field: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if not isinstance(self.field, str) or not self.field:
            raise InvalidQueryError("Order field must be a non-empty string.")
        object.__setattr__(self, "direction", SortDirection.parse(self.direction))


ConditionValues = Union[Scalar, Iterable[Scalar]]


@dataclass(frozen=True)
class Query:
    """Declarative projection, filter, order, and pagination request.

    Attributes:
        fields: Field names to project; empty selects every schema field.
        conditions: Field name to acceptable values; empty disables filtering.
        order: Optional single sort key.
        limit: Optional positive page size.
        page: Optional page number, used only with limit; non-positive means 1.
    """

    fields: tuple[str, ...] = ()
    conditions: Mapping[str, frozenset[Scalar]] = field(default_factory=dict)
    order: OrderBy | None = None
    limit: int | None = None
    page: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _normalize_fields(self.fields))
        object.__setattr__(self, "conditions", _normalize_conditions(self.conditions))
        object.__setattr__(self, "order", _normalize_order(self.order))
        _validate_integer("limit", self.limit)
        _validate_integer("page", self.page)
        if self.limit is not None and self.limit < 1:
            raise InvalidQueryError(f"Invalid limit {self.limit!r}: expected a positive integer.")
        if self.page is not None and self.page < 1:
            object.__setattr__(self, "page", None)


@dataclass(frozen=True)
class ResultSet:
    """Final ordered records returned to the caller.

    Attributes:
        records: Result records in output order.
    """

    records: tuple[Record, ...] = ()

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    def to_dicts(self) -> list[dict[str, Scalar]]:
        """Return plain dict copies for serialization."""
        return [dict(record) for record in self.records]


def _normalize_fields(fields: Iterable[str]) -> tuple[str, ...]:
    if isinstance(fields, str):
        fields = (fields,)
    if isinstance(fields, (set, frozenset)):
        fields = sorted(fields)
    normalized: list[str] = []
    for name in fields:
        if not isinstance(name, str) or not name:
            raise InvalidQueryError(f"Invalid field name {name!r}: expected non-empty string.")
        if name not in normalized:
            normalized.append(name)
    return tuple(normalized)


def _normalize_conditions(
    conditions: Mapping[str, ConditionValues],
) -> Mapping[str, frozenset[Scalar]]:
    normalized: dict[str, frozenset[Scalar]] = {}
    for name, values in conditions.items():
        if not isinstance(name, str) or not name:
            raise InvalidQueryError(f"Invalid condition field {name!r}: expected non-empty string.")
        if isinstance(values, (str, int, float)):
            normalized[name] = frozenset((values,))
        else:
            normalized[name] = frozenset(values)
    return MappingProxyType(normalized)


def _normalize_order(order: object) -> OrderBy | None:
    if order is None or isinstance(order, OrderBy):
        return order
    if isinstance(order, str):
        return OrderBy(field=order)
    if isinstance(order, Sequence) and len(order) == 2:
        return OrderBy(field=order[0], direction=order[1])
    raise InvalidQueryError(
        f"Invalid order {order!r}: expected OrderBy or a (field, direction) pair."
    )


def _validate_integer(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQueryError(f"Invalid {name} {value!r}: expected an integer.")
