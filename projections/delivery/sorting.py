"""
Delivery Desk Projections — Table Sorting
===========================================
Generic column sort for tabular views.

- Strings compare case-insensitively.
- Numbers, dates and timestamps compare by natural order.
- Ties compare equal; the sort is stable, so tied rows keep their
  input order in both directions.
- Missing values (None) go last in ascending order, first in descending.
"""

from __future__ import annotations

from enum import Enum
from functools import cmp_to_key
from typing import Any, Iterable, List, Mapping

ASCENDING = "asc"
DESCENDING = "desc"

VALID_DIRECTIONS = frozenset({ASCENDING, DESCENDING})


def column_value(row: Any, column: str) -> Any:
    """Read `column` from a mapping row or an attribute of an object row."""
    if isinstance(row, Mapping):
        value = row.get(column)
    else:
        value = getattr(row, column, None)
    if isinstance(value, Enum):
        value = value.value
    return value


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison: -1, 0 or 1."""
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    if isinstance(a, str) and isinstance(b, str):
        a, b = a.lower(), b.lower()
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def sort_table(rows: Iterable[Any], column: str, direction: str = ASCENDING) -> List[Any]:
    """
    Return a new list of rows ordered by `column`.

    Raises ValueError for a direction other than "asc" / "desc".
    """
    if direction not in VALID_DIRECTIONS:
        raise ValueError(
            f"direction '{direction}' is not valid. "
            f"Must be one of: {sorted(VALID_DIRECTIONS)}"
        )

    sign = 1 if direction == ASCENDING else -1

    def _compare(left: Any, right: Any) -> int:
        return sign * compare_values(column_value(left, column), column_value(right, column))

    return sorted(rows, key=cmp_to_key(_compare))
