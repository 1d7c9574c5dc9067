"""
rowmat - Row-Major Matrices

Minimal in-memory matrix containers:
- DenseMatrix: float64 or bool values in one flat row-major buffer
- RowIterator: single-pass row cursor with in-place bulk transforms
- SparseMatrix: float64 cells addressed by (row, column), unset cells read 0.0

Architecture:
    ┌──────────────────────────────────────────────┐
    │  DenseMatrix ──iterator()──> RowIterator     │
    │      flat numpy buffer, index arithmetic     │
    ├──────────────────────────────────────────────┤
    │  SparseMatrix                                │
    │      row -> column -> value dicts            │
    └──────────────────────────────────────────────┘

Example:
    >>> import rowmat
    >>> mat = rowmat.DenseMatrix(3)
    >>> mat.add_row([1, 2, 3])
    >>> mat.iterator().apply_to_matrix(lambda v: v * v)
    >>> mat.get_row(0)
    array([1., 4., 9.])
    >>>
    >>> sp = rowmat.SparseMatrix()
    >>> sp.set(0, 5, 2.0)
    >>> sp.get(3, 3)
    0.0
"""

__version__ = '0.1.0'

from ._dtypes import DType, float64, bool_
from ._errors import (
    MatrixError,
    RowSizeError,
    RowIndexError,
    ColumnIndexError,
)
from ._config import (
    RowmatConfig,
    SamplingConfig,
    ValidationConfig,
    config,
    get_config,
    set_seed,
    set_validation,
)
from .dense import DenseMatrix, RowIterator
from .sparse import SparseMatrix, ColumnValue, ColumnValues, RowValue, RowValues
from ._interop import to_numpy, from_numpy, to_scipy

__all__ = [
    # Version
    '__version__',

    # Type constants
    'DType',
    'float64',
    'bool_',

    # Errors
    'MatrixError',
    'RowSizeError',
    'RowIndexError',
    'ColumnIndexError',

    # Configuration
    'RowmatConfig',
    'SamplingConfig',
    'ValidationConfig',
    'config',
    'get_config',
    'set_seed',
    'set_validation',

    # Dense
    'DenseMatrix',
    'RowIterator',

    # Sparse
    'SparseMatrix',
    'ColumnValue',
    'ColumnValues',
    'RowValue',
    'RowValues',

    # Interop
    'to_numpy',
    'from_numpy',
    'to_scipy',
]
