"""
Row Iterator

A forward, single-pass cursor over the rows of a DenseMatrix.

State machine:

    BEFORE_FIRST --advance()--> ON_ROW(0) --advance()--> ON_ROW(1) ...
                                                     \\
                                                      --> EXHAUSTED

Once EXHAUSTED, ``advance()`` keeps returning False; create a new iterator
with ``DenseMatrix.iterator()`` for another pass. The iterator keeps a
reference to its matrix and reads the live buffer, so writes through the
iterator change the matrix, and two iterators over the same matrix see each
other's writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable

import numpy as np

from .._bounds import check_row_index

if TYPE_CHECKING:
    from ._matrix import DenseMatrix

__all__ = ['RowIterator', 'Func']

# Element transform: receives a Python float/bool, returns the new value
Func = Callable[[object], object]


class RowIterator:
    """
    Single-pass row cursor over a DenseMatrix.

    Example:
        >>> it = mat.iterator()
        >>> while it.advance():
        ...     print(it.index, it.row)
        >>>
        >>> # Or with the Python iteration protocol
        >>> for row in mat.iterator():
        ...     row *= 2
    """

    __slots__ = ("_matrix", "_row", "_exhausted")

    def __init__(self, matrix: "DenseMatrix"):
        self._matrix = matrix
        self._row = -1
        self._exhausted = False

    @property
    def matrix(self) -> "DenseMatrix":
        """Matrix being traversed."""
        return self._matrix

    @property
    def columns(self) -> int:
        return self._matrix.columns

    @property
    def index(self) -> int:
        """Current row index; -1 before the first advance()."""
        return self._row

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def advance(self) -> bool:
        """
        Move to the next row.

        Returns:
            True if the cursor is now on a row, False once past the last row
        """
        if self._exhausted:
            return False
        self._row += 1
        if self._row >= self._matrix.rows:
            self._exhausted = True
            return False
        return True

    def _current(self) -> int:
        # Before the first advance() the cursor reads as row 0
        row = max(self._row, 0)
        check_row_index(row, self._matrix.rows)
        return row

    @property
    def row(self) -> np.ndarray:
        """Live view of the current row."""
        return self._matrix.get_row(self._current())

    @property
    def row_indices(self) -> np.ndarray:
        """Absolute buffer indices spanned by the current row."""
        start = self._current() * self.columns
        return np.arange(start, start + self.columns)

    def __iter__(self) -> "RowIterator":
        return self

    def __next__(self) -> np.ndarray:
        if not self.advance():
            raise StopIteration
        return self.row

    # =========================================================================
    # Bulk Transforms
    # =========================================================================

    def apply_to_matrix(self, func: Func) -> None:
        """
        Apply ``func`` to every element, row by row, in place.

        Drives the iterator to exhaustion; call it on a fresh iterator.
        """
        while self.advance():
            row = self.row
            row[:] = [func(v) for v in row.tolist()]

    def apply_to_columns(self, func: Func, columns: Iterable[int]) -> None:
        """
        Apply ``func`` to the elements of the given row-relative columns.

        Column indices outside ``[0, columns)`` match nothing; a column listed
        more than once is still transformed once per row. Drives the iterator
        to exhaustion.
        """
        width = self.columns
        selected = sorted({c for c in columns if 0 <= c < width})
        while self.advance():
            row = self.row
            for c in selected:
                row[c] = func(row[c].item())
