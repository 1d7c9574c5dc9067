"""
Dense Row-Major Matrix

DenseMatrix stores every element in a single flat numpy buffer, rows laid
end-to-end, so element ``(row, column)`` lives at ``row * columns + column``.
All row and column operations are index arithmetic over that buffer.

Element types are restricted to float64 and bool (see ``rowmat.DType``).

Buffer layout:

    columns = 3
    data    = [a0 a1 a2 | b0 b1 b2 | c0 c1 c2 | <spare capacity> ]
               row 0      row 1      row 2

The buffer keeps spare capacity so repeated ``add_row`` calls are amortised
O(columns). Row views returned by ``get_row`` alias the buffer; a view taken
before the buffer is reallocated (by growth, ``append_column`` or
``set_backing_data``) keeps pointing at the old storage.

Example:
    >>> mat = DenseMatrix(3)
    >>> mat.add_row([1, 2, 3])
    >>> mat.append_column(0)
    >>> mat.get_row(0)
    array([1., 2., 3., 0.])
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Tuple, Union

import numpy as np

from .._bounds import check_bounds, check_column_index, check_row_index, check_row_size
from .._config import config
from .._dtypes import DType, float64, normalize_dtype, numpy_dtype, zero_value
from .._errors import RowSizeError

if TYPE_CHECKING:
    from ._iterator import RowIterator

__all__ = ['DenseMatrix']

logger = logging.getLogger("rowmat.dense")

_MIN_CAPACITY = 16


class DenseMatrix:
    """
    Row-major dense matrix of float64 or bool values.

    Attributes:
        columns (int): Number of columns (fixed except for append_column)
        rows (int): Number of complete rows in the buffer
        dtype (DType): Element type
        data (np.ndarray): View of the used part of the buffer
    """

    __slots__ = ("_buf", "_size", "_columns", "_dtype")

    def __init__(self, columns: int, dtype: Union[str, DType] = float64):
        """
        Create an empty matrix.

        Args:
            columns: Number of columns, any non-negative integer
            dtype: Element type, float64 (default) or bool
        """
        columns = int(columns)
        if columns < 0:
            raise ValueError(f"columns must be non-negative, got {columns}")

        self._dtype = normalize_dtype(dtype)
        self._columns = columns
        self._buf = np.empty(0, dtype=numpy_dtype(self._dtype))
        self._size = 0

    @classmethod
    def _wrap(cls, columns: int, dtype: DType, buffer: np.ndarray) -> "DenseMatrix":
        """Build a matrix that takes ``buffer`` as its storage (no copy)."""
        mat = cls(columns, dtype)
        mat._buf = buffer
        mat._size = buffer.size
        return mat

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def columns(self) -> int:
        """Number of columns."""
        return self._columns

    @property
    def rows(self) -> int:
        """Number of rows. A matrix with zero columns has zero rows."""
        if self._columns == 0:
            return 0
        return self._size // self._columns

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, columns)."""
        return self.rows, self._columns

    @property
    def dtype(self) -> DType:
        """Element type."""
        return self._dtype

    @property
    def data(self) -> np.ndarray:
        """Flat row-major view of the matrix contents."""
        return self._buf[:self._size]

    @property
    def size(self) -> int:
        """Total number of elements (rows * columns)."""
        return self.rows * self._columns

    def __len__(self) -> int:
        return self.rows

    def __iter__(self):
        return iter(self.iterator())

    def __repr__(self) -> str:
        return (f"DenseMatrix(shape={self.shape}, dtype={self._dtype}, "
                f"capacity={self._buf.size})")

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _grid(self) -> np.ndarray:
        """(rows, columns) view over the complete rows."""
        rows = self.rows
        return self._buf[:rows * self._columns].reshape(rows, self._columns)

    def _reserve(self, extra: int) -> None:
        """Make room for ``extra`` more elements, doubling capacity as needed."""
        needed = self._size + extra
        if needed <= self._buf.size:
            return
        capacity = max(needed, 2 * self._buf.size, _MIN_CAPACITY)
        grown = np.empty(capacity, dtype=self._buf.dtype)
        grown[:self._size] = self._buf[:self._size]
        self._buf = grown

    def _as_row(self, values: Any) -> np.ndarray:
        row = np.asarray(values, dtype=self._buf.dtype)
        if row.ndim != 1:
            raise RowSizeError(f"row must be one-dimensional, got shape {row.shape}")
        return row

    # =========================================================================
    # Row Operations
    # =========================================================================

    def add_row(self, values: Sequence) -> None:
        """
        Append ``values`` as a new last row.

        Raises:
            RowSizeError: If len(values) != columns. The matrix is left unchanged.
        """
        row = self._as_row(values)
        check_row_size(row.size, self._columns)

        self._reserve(row.size)
        self._buf[self._size:self._size + row.size] = row
        self._size += row.size

    def get_row(self, row: int) -> np.ndarray:
        """
        Return a view over row ``row``.

        Writes through the returned array change the matrix.

        Raises:
            RowIndexError: If row is outside [0, rows)
        """
        row = check_row_index(row, self.rows)
        start = row * self._columns
        return self._buf[start:start + self._columns]

    def remove_row(self, row: int) -> None:
        """
        Delete row ``row``, shifting the following rows down by one.

        Raises:
            RowIndexError: If row is outside [0, rows)
        """
        row = check_row_index(row, self.rows)
        start = row * self._columns
        end = start + self._columns

        self._buf[start:self._size - self._columns] = self._buf[end:self._size]
        self._size -= self._columns
        logger.debug("Removed row %d, %d rows remain", row, self.rows)

    # =========================================================================
    # Cell Operations
    # =========================================================================

    def get_value(self, row: int, column: int):
        """
        Value at (row, column) as a Python float or bool.

        Raises:
            RowIndexError: If row is outside [0, rows)
            ColumnIndexError: If column is outside [0, columns)
        """
        row, column = check_bounds(row, column, self.rows, self._columns)
        return self._buf[row * self._columns + column].item()

    def update_value(self, value, row: int, column: int) -> None:
        """
        Overwrite the value at (row, column).

        Raises:
            RowIndexError: If row is outside [0, rows)
            ColumnIndexError: If column is outside [0, columns)
        """
        row, column = check_bounds(row, column, self.rows, self._columns)
        self._buf[row * self._columns + column] = value

    # =========================================================================
    # Column Operations
    # =========================================================================

    def append_column(self, default_value) -> None:
        """
        Add a column at the end of every row, filled with ``default_value``.

        Rebuilds the buffer: O(rows * columns).
        """
        rows = self.rows
        columns = self._columns

        rebuilt = np.empty(rows * (columns + 1), dtype=self._buf.dtype)
        grid = rebuilt.reshape(rows, columns + 1)
        grid[:, :columns] = self._grid()
        grid[:, columns] = default_value

        self._buf = rebuilt
        self._size = rebuilt.size
        self._columns = columns + 1
        logger.debug("Appended column %d across %d rows", columns, rows)

    def get_column_data(self, column: int) -> np.ndarray:
        """
        Values of ``column`` across all rows (a copy).

        Raises:
            ColumnIndexError: If column is outside [0, columns)
        """
        column = check_column_index(column, self._columns)
        return self._grid()[:, column].copy()

    # =========================================================================
    # Row Statistics
    # =========================================================================

    def max_sum(self) -> Optional[np.ndarray]:
        """Copy of the row with the greatest element sum; earliest row wins ties."""
        if self.rows == 0:
            return None
        grid = self._grid()
        return grid[int(np.argmax(grid.sum(axis=1)))].copy()

    def min_sum(self) -> Optional[np.ndarray]:
        """Copy of the row with the least element sum; earliest row wins ties."""
        if self.rows == 0:
            return None
        grid = self._grid()
        return grid[int(np.argmin(grid.sum(axis=1)))].copy()

    def mode(self) -> Optional[np.ndarray]:
        """
        Most frequent row (element-wise equality).

        Rows are grouped in scan order; when several groups share the highest
        count the group seen first wins. Returns a copy of its first row, or
        None for an empty matrix.
        """
        grid = self._grid()
        if grid.shape[0] == 0:
            return None

        representatives = []
        counts = []
        for i in range(grid.shape[0]):
            for group, rep in enumerate(representatives):
                if np.array_equal(grid[i], grid[rep]):
                    counts[group] += 1
                    break
            else:
                representatives.append(i)
                counts.append(1)

        best = counts.index(max(counts))
        return grid[representatives[best]].copy()

    def non_zero_rows(self) -> "DenseMatrix":
        """New matrix holding only the rows with at least one non-zero element."""
        grid = self._grid()
        kept = grid[(grid != zero_value(self._dtype)).any(axis=1)]
        return DenseMatrix._wrap(self._columns, self._dtype, kept.reshape(-1))

    def sample(self, amount: int) -> "DenseMatrix":
        """
        Randomly pick rows into a new matrix.

        ``amount`` is compared against the total element count, not the row
        count:

        - amount < 0: an empty matrix is returned
        - amount >= rows * columns: ``self`` is returned (not a copy)
        - otherwise each row is kept independently when an integer draw from
          ``[0, scale)`` is below ``amount / total * scale``; the number of
          rows returned is approximate.

        Draws come from ``rowmat.config.rng()``, one generator seeded from
        ``rowmat.config.sampling`` that successive calls keep drawing from.
        """
        if amount < 0:
            return DenseMatrix(self._columns, self._dtype)

        total = self._size
        if amount >= total:
            return self

        scale = config.sampling.scale
        threshold = amount / total * scale

        grid = self._grid()
        draws = config.rng().integers(0, scale, size=grid.shape[0])
        kept = grid[draws < threshold]
        logger.debug("Sampled %d of %d rows (threshold %.3f/%d)",
                     kept.shape[0], grid.shape[0], threshold, scale)
        return DenseMatrix._wrap(self._columns, self._dtype, kept.reshape(-1))

    # =========================================================================
    # Buffer Access
    # =========================================================================

    def set_backing_data(self, data) -> None:
        """
        Replace the whole buffer with ``data`` (flattened row-major).

        The caller is responsible for ``len(data)`` being a multiple of
        ``columns``. With ``config.validation.check_backing_data`` enabled a
        ragged buffer raises RowSizeError instead of being logged; otherwise
        the trailing partial row is ignored and overwritten by the next
        ``add_row``.

        A writeable array of the matching dtype is taken without copying.
        """
        buffer = np.asarray(data, dtype=self._buf.dtype).reshape(-1)
        if not buffer.flags.writeable:
            buffer = buffer.copy()

        if self._columns:
            used = buffer.size - buffer.size % self._columns
        else:
            used = 0

        if used != buffer.size:
            msg = (f"backing data of {buffer.size} elements is not a multiple "
                   f"of {self._columns} columns")
            if config.validation.check_backing_data:
                raise RowSizeError(msg)
            logger.warning("%s; trailing elements are ignored", msg)

        self._buf = buffer
        self._size = used

    def iterator(self) -> "RowIterator":
        """Fresh single-pass row iterator over this matrix."""
        from ._iterator import RowIterator
        return RowIterator(self)

    def to_numpy(self, copy: bool = True) -> np.ndarray:
        """(rows, columns) numpy array of the matrix contents."""
        from .._interop import to_numpy
        return to_numpy(self, copy=copy)
