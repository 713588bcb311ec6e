"""In-memory data table.

Column-oriented, immutable table used as the source of the querying
pipeline. Modifiers never mutate a table; ``apply_modifier`` always yields
a new derived view which remembers the source row each of its rows came
from.

Value comparison:
 - ``None`` sorts before any other value
 - strings compare case-insensitively (raw value breaks ties)
 - mixed columns compare by type rank first, then by value
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .modifiers import DataModifier

__all__ = [
    "Comparator",
    "ColumnValueType",
    "DataTable",
    "UnknownColumnError",
    "compare_mixed",
    "compare_numbers",
    "compare_strings",
    "infer_column_type",
]

Comparator = Callable[[Any, Any], int]


class UnknownColumnError(KeyError):
    """Raised when a column id is not present in the table."""


class ColumnValueType(str, Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    MIXED = "mixed"
    EMPTY = "empty"


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _none_first(a: Any, b: Any) -> Optional[int]:
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    return None


def compare_numbers(a: Any, b: Any) -> int:
    result = _none_first(a, b)
    if result is not None:
        return result
    return _cmp(a, b)


def compare_strings(a: Any, b: Any) -> int:
    result = _none_first(a, b)
    if result is not None:
        return result
    return _cmp(str(a).casefold(), str(b).casefold()) or _cmp(str(a), str(b))


def _type_rank(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return 1
    if isinstance(value, str):
        return 2
    return 3


def compare_mixed(a: Any, b: Any) -> int:
    result = _none_first(a, b)
    if result is not None:
        return result
    rank_a, rank_b = _type_rank(a), _type_rank(b)
    if rank_a != rank_b:
        return _cmp(rank_a, rank_b)
    if rank_a == 2:
        return compare_strings(a, b)
    if rank_a == 3:
        try:
            return _cmp(a, b)
        except TypeError:
            return _cmp(repr(a), repr(b))
    return _cmp(a, b)


_DEFAULT_COMPARATORS: Dict[ColumnValueType, Comparator] = {
    ColumnValueType.NUMBER: compare_numbers,
    ColumnValueType.STRING: compare_strings,
    ColumnValueType.BOOLEAN: compare_numbers,
    ColumnValueType.MIXED: compare_mixed,
    ColumnValueType.EMPTY: compare_mixed,
}


def infer_column_type(values: Iterable[Any]) -> ColumnValueType:
    """Infer the value type of a column, ignoring ``None`` cells."""
    kinds = set()
    for value in values:
        if value is None:
            continue
        if isinstance(value, bool):
            kinds.add(ColumnValueType.BOOLEAN)
        elif isinstance(value, (int, float)):
            kinds.add(ColumnValueType.NUMBER)
        elif isinstance(value, str):
            kinds.add(ColumnValueType.STRING)
        else:
            kinds.add(ColumnValueType.MIXED)
        if len(kinds) > 1:
            return ColumnValueType.MIXED
    if not kinds:
        return ColumnValueType.EMPTY
    return kinds.pop()


class DataTable:
    """Immutable column-oriented table.

    Usage:
        table = DataTable({"id": [1, 2], "v": [5, 9]})
        view = table.apply_modifier(SortModifier("v", "desc"))
    """

    def __init__(
        self,
        columns: Mapping[str, Sequence[Any]] | None = None,
        *,
        original_row_indexes: Sequence[int] | None = None,
    ) -> None:
        self._columns: Dict[str, List[Any]] = {
            str(column_id): list(values) for column_id, values in (columns or {}).items()
        }
        lengths = {len(values) for values in self._columns.values()}
        if len(lengths) > 1:
            raise ValueError(f"Columns must have equal length, got lengths {sorted(lengths)}")
        self._row_count = lengths.pop() if lengths else 0
        if original_row_indexes is None:
            self._original_row_indexes = list(range(self._row_count))
        else:
            if len(original_row_indexes) != self._row_count:
                raise ValueError("original_row_indexes must match the row count")
            self._original_row_indexes = list(original_row_indexes)

    @classmethod
    def from_rows(
        cls, rows: Iterable[Mapping[str, Any]], column_ids: Sequence[str] | None = None
    ) -> "DataTable":
        """Build a table from row mappings; missing cells become ``None``."""
        materialized = list(rows)
        if column_ids is None:
            seen: Dict[str, None] = {}
            for row in materialized:
                for key in row:
                    seen.setdefault(key, None)
            column_ids = list(seen)
        return cls({cid: [row.get(cid) for row in materialized] for cid in column_ids})

    def __repr__(self) -> str:
        return f"DataTable(columns={self.get_column_ids()!r}, rows={self._row_count})"

    # Queries ----------------------------------------------------------
    def get_row_count(self) -> int:
        return self._row_count

    def get_column_ids(self) -> List[str]:
        return list(self._columns)

    def has_column(self, column_id: str) -> bool:
        return column_id in self._columns

    def get_column(self, column_id: str) -> List[Any]:
        return list(self._column(column_id))

    def get_cell(self, column_id: str, row_index: int) -> Any:
        return self._column(column_id)[row_index]

    def get_row(self, row_index: int) -> Dict[str, Any]:
        if not 0 <= row_index < self._row_count:
            raise IndexError(f"Row index {row_index} out of range")
        return {cid: values[row_index] for cid, values in self._columns.items()}

    def get_rows(self) -> List[Dict[str, Any]]:
        return [self.get_row(i) for i in range(self._row_count)]

    def get_original_row_index(self, row_index: int) -> int:
        return self._original_row_indexes[row_index]

    def get_column_type(self, column_id: str) -> ColumnValueType:
        return infer_column_type(self._column(column_id))

    def get_default_comparator(self, column_id: str) -> Comparator:
        return _DEFAULT_COMPARATORS[self.get_column_type(column_id)]

    # Derivation -------------------------------------------------------
    def apply_modifier(self, modifier: Optional["DataModifier"]) -> "DataTable":
        """Return a new view transformed by ``modifier`` (identity when None)."""
        if modifier is None:
            return self.derive(range(self._row_count))
        return modifier.modify_table(self)

    def derive(self, row_indexes: Iterable[int]) -> "DataTable":
        """Return a view made of the given rows, in the given order."""
        picked = list(row_indexes)
        return DataTable(
            {cid: [values[i] for i in picked] for cid, values in self._columns.items()},
            original_row_indexes=[self._original_row_indexes[i] for i in picked],
        )

    def _column(self, column_id: str) -> List[Any]:
        try:
            return self._columns[column_id]
        except KeyError:
            raise UnknownColumnError(column_id) from None
