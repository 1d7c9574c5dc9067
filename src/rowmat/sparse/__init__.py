"""Sparse coordinate-addressed matrices."""

from ._matrix import SparseMatrix
from ._values import ColumnValue, ColumnValues, RowValue, RowValues

__all__ = [
    'SparseMatrix',
    'ColumnValue',
    'ColumnValues',
    'RowValue',
    'RowValues',
]
