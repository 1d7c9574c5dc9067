"""Row-size and index validation shared by the dense and sparse matrices.

All ranges are half-open: a row index is valid in ``[0, rows)`` and a column
index in ``[0, columns)``. The index checks return the index as a plain int,
so numpy integers are accepted and floats are rejected before they reach a
buffer.
"""

import operator

from ._errors import ColumnIndexError, RowIndexError, RowSizeError

__all__ = [
    'check_row_size',
    'check_row_index',
    'check_column_index',
    'check_bounds',
]


def check_row_size(size: int, columns: int) -> None:
    if size != columns:
        raise RowSizeError(f"row has {size} values, matrix has {columns} columns")


def check_row_index(row, rows: int) -> int:
    try:
        row = operator.index(row)
    except TypeError:
        raise RowIndexError(f"row index must be an integer, got {row!r}") from None
    if row < 0 or row >= rows:
        raise RowIndexError(f"row index {row} out of range [0, {rows})")
    return row


def check_column_index(column, columns: int) -> int:
    try:
        column = operator.index(column)
    except TypeError:
        raise ColumnIndexError(f"column index must be an integer, got {column!r}") from None
    if column < 0 or column >= columns:
        raise ColumnIndexError(f"column index {column} out of range [0, {columns})")
    return column


def check_bounds(row, column, rows: int, columns: int) -> tuple:
    """Validate a (row, column) cell address; rows are checked first."""
    return check_row_index(row, rows), check_column_index(column, columns)
