"""Field comparators and stable ordering for within-object listings.

Each ``SortField`` maps to a three-way comparison function. Reversal negates
the comparison result, so entries with equal keys keep their input order in
both directions.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Callable, Iterable

from .types import ListingEntry, SortField

Comparator = Callable[[ListingEntry, ListingEntry], int]


def canonical_timestamp(value: datetime) -> datetime:
    """Return ``value`` in UTC; naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _three_way(left, right) -> int:
    return (left > right) - (left < right)


def compare_name(a: ListingEntry, b: ListingEntry) -> int:
    return _three_way(a.display_name, b.display_name)


def compare_version(a: ListingEntry, b: ListingEntry) -> int:
    return _three_way(a.version.number, b.version.number)


def compare_updated(a: ListingEntry, b: ListingEntry) -> int:
    return _three_way(canonical_timestamp(a.updated), canonical_timestamp(b.updated))


def compare_none(a: ListingEntry, b: ListingEntry) -> int:
    return 0


COMPARATORS: dict[SortField, Comparator] = {
    SortField.NAME: compare_name,
    SortField.VERSION: compare_version,
    SortField.UPDATED: compare_updated,
    SortField.NONE: compare_none,
}


def comparator_for(field: SortField, reverse: bool = False) -> Comparator:
    compare = COMPARATORS[field]
    if not reverse:
        return compare
    return lambda a, b: -compare(a, b)


def sort_entries(entries: Iterable[ListingEntry], field: SortField, reverse: bool = False) -> list[ListingEntry]:
    """Return a new list of ``entries`` stably ordered by ``field``."""
    ordered = list(entries)
    ordered.sort(key=cmp_to_key(comparator_for(field, reverse)))
    return ordered


__all__ = [
    "COMPARATORS",
    "Comparator",
    "canonical_timestamp",
    "comparator_for",
    "compare_name",
    "compare_none",
    "compare_updated",
    "compare_version",
    "sort_entries",
]
