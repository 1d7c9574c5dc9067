"""Value collections returned by SparseMatrix row and column extraction."""

from typing import NamedTuple

__all__ = ['ColumnValue', 'RowValue', 'ColumnValues', 'RowValues']


class ColumnValue(NamedTuple):
    """A cell of a sparse row."""
    column: int
    value: float


class RowValue(NamedTuple):
    """A cell of a sparse column."""
    row: int
    value: float


class _Values(list):
    """Unordered list of (index, value) pairs."""

    def sum(self) -> float:
        """Sum of the values."""
        total = 0.0
        for item in self:
            total += item.value
        return total

    def to_dict(self) -> dict:
        """Index -> value mapping."""
        return {item[0]: item.value for item in self}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list.__repr__(self)})"


class ColumnValues(_Values):
    """(column, value) pairs of one sparse row."""


class RowValues(_Values):
    """(row, value) pairs of one sparse column."""
