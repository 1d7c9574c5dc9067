"""
Sparse Coordinate Matrix

SparseMatrix stores float64 cells as ``row -> column -> value`` nested dicts
and is meant for matrices that are mostly unset. Unset cells read as 0.0.

Nesting by row (rather than keying on a (row, column) tuple) keeps rows
cheap to extract and leaves room to grow columns without rewriting keys.
Column extraction scans every row.

``columns`` is a high-water mark: the greatest column index ever written,
not an exclusive bound.

Both fields are plain dataclass fields so a generic serializer can walk them:

    >>> import dataclasses, json
    >>> json.dumps(dataclasses.asdict(mat))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .._dtypes import DType
from .._errors import RowIndexError
from ._values import ColumnValue, ColumnValues, RowValue, RowValues

__all__ = ['SparseMatrix']


@dataclass
class SparseMatrix:
    """
    Mostly-empty float64 matrix addressed by (row, column).

    Attributes:
        columns: Highest column index ever set
        data: Mapping row -> (column -> value)

    Example:
        >>> mat = SparseMatrix()
        >>> mat.set(0, 5, 2.0)
        >>> mat.increment(0, 1)
        >>> mat.get_row(0).sum()
        3.0
    """
    columns: int = 0
    data: Dict[int, Dict[int, float]] = field(default_factory=dict)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def rows(self) -> int:
        """Number of distinct rows that hold at least one cell."""
        return len(self.data)

    @property
    def dtype(self) -> DType:
        return DType.float64

    @property
    def nnz(self) -> int:
        """Number of stored cells."""
        return sum(len(cells) for cells in self.data.values())

    # =========================================================================
    # Cell Operations
    # =========================================================================

    def _row_cells(self, row: int, column: int) -> Dict[int, float]:
        cells = self.data.get(row)
        if cells is None:
            cells = self.data[row] = {}
        if column > self.columns:
            self.columns = column
        return cells

    def set(self, row: int, column: int, value: float) -> None:
        """Store ``value`` at (row, column), overwriting any previous value."""
        self._row_cells(row, column)[column] = float(value)

    def get(self, row: int, column: int) -> float:
        """Value at (row, column); 0.0 when the cell was never set."""
        cells = self.data.get(row)
        if cells is None:
            return 0.0
        return cells.get(column, 0.0)

    def increment(self, row: int, column: int) -> None:
        """Add 1.0 to the cell at (row, column), creating it if needed."""
        cells = self._row_cells(row, column)
        cells[column] = cells.get(column, 0.0) + 1.0

    # =========================================================================
    # Extraction
    # =========================================================================

    def get_row(self, row: int) -> ColumnValues:
        """
        The (column, value) pairs stored in ``row``, in no particular order.

        Raises:
            RowIndexError: If nothing was ever set in ``row``
        """
        cells = self.data.get(row)
        if cells is None:
            raise RowIndexError(f"row {row} has no values")
        return ColumnValues(ColumnValue(c, v) for c, v in cells.items())

    def get_column(self, column: int) -> RowValues:
        """The (row, value) pairs stored in ``column``, in no particular order."""
        values = RowValues()
        for row, cells in self.data.items():
            if column in cells:
                values.append(RowValue(row, cells[column]))
        return values

    def to_scipy(self, shape: Optional[Tuple[int, int]] = None):
        """Convert to ``scipy.sparse.csr_matrix``."""
        from .._interop import to_scipy
        return to_scipy(self, shape=shape)
