"""Equality and membership condition matching.

This module keeps records whose values satisfy every condition of a
query. Conditions combine with logical AND; each record is decided once.
"""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import AbstractSet, Iterable, Iterator, Mapping, Union

from core.types import Record, Scalar
from query.numeric import as_number

MatchKey = Union[Decimal, str]


class CompiledConditions(Mapping[str, frozenset[MatchKey]]):
    """Conditions with acceptable values normalized into match keys."""

    def __init__(self, conditions: Mapping[str, Iterable[Scalar]]) -> None:
        keys = {
            name: frozenset(match_key(value) for value in values)
            for name, values in conditions.items()
        }
        self._keys = MappingProxyType(keys)

    def __getitem__(self, name: str) -> frozenset[MatchKey]:
        return self._keys[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)


def match_key(value: Scalar) -> MatchKey:
    """Normalize a scalar so numerically equal values compare equal.

    Numeric values become exact decimals, everything else its string form,
    so ``"2"``, ``"2.0"`` and ``2`` share a key while ``"Bob"`` stays text.
    """
    number = as_number(value)
    if number is not None:
        return number
    return str(value)


def compile_conditions(conditions: Mapping[str, Iterable[Scalar]]) -> CompiledConditions:
    """Normalize acceptable value sets once per query."""
    if isinstance(conditions, CompiledConditions):
        return conditions
    return CompiledConditions(conditions)


def matches(record: Record, conditions: Mapping[str, Iterable[Scalar]]) -> bool:
    """Return whether a record satisfies all conditions.

    Args:
        record: Parsed record holding every condition field.
        conditions: Field name to acceptable values, raw or compiled.

    Returns:
        True when conditions are empty or every field value is accepted.
    """
    if not conditions:
        return True
    compiled = compile_conditions(conditions)
    for name, accepted in compiled.items():
        if not _is_accepted(record[name], accepted):
            return False
    return True


def _is_accepted(value: Scalar, accepted: AbstractSet[MatchKey]) -> bool:
    return match_key(value) in accepted
