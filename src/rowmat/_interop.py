"""
Interop with numpy and scipy.

Dense matrices export to a ``(rows, columns)`` numpy array whose row-major
buffer holds exactly ``rows * columns`` elements. Sparse matrices export to
``scipy.sparse.csr_matrix``; scipy is imported on first use.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from ._dtypes import normalize_dtype

if TYPE_CHECKING:
    from scipy.sparse import csr_matrix
    from .dense import DenseMatrix
    from .sparse import SparseMatrix

__all__ = ['to_numpy', 'from_numpy', 'to_scipy']

logger = logging.getLogger("rowmat.interop")


def to_numpy(matrix: "DenseMatrix", copy: bool = True) -> np.ndarray:
    """
    Export a DenseMatrix as a 2-D numpy array.

    Args:
        matrix: Source matrix
        copy: If False, return a view sharing the matrix buffer

    Returns:
        Array of shape (rows, columns) and the matrix's dtype
    """
    rows, columns = matrix.shape
    grid = matrix.data[:rows * columns].reshape(rows, columns)
    return grid.copy() if copy else grid


def from_numpy(array) -> "DenseMatrix":
    """
    Create a DenseMatrix from a 2-D float64 or bool array (copies data).

    Other numeric dtypes are converted to float64.
    """
    from .dense import DenseMatrix

    arr = np.asarray(array)
    if arr.ndim != 2:
        raise ValueError(f"Expected a 2-D array, got {arr.ndim}-D")

    if arr.dtype != np.bool_ and arr.dtype != np.float64:
        arr = arr.astype(np.float64)
    dtype = normalize_dtype(arr.dtype)

    mat = DenseMatrix(arr.shape[1], dtype=dtype)
    mat.set_backing_data(np.array(arr, copy=True, order="C").reshape(-1))
    return mat


def to_scipy(matrix: "SparseMatrix",
             shape: Optional[Tuple[int, int]] = None) -> "csr_matrix":
    """
    Export a SparseMatrix as ``scipy.sparse.csr_matrix``.

    Args:
        matrix: Source matrix
        shape: Output shape; defaults to (max row index + 1, columns + 1),
            or (0, 0) for an empty matrix

    Raises:
        ValueError: If a stored index is negative or falls outside ``shape``
    """
    import scipy.sparse as sp

    rows, cols, vals = [], [], []
    for row, cells in matrix.data.items():
        for column, value in cells.items():
            rows.append(row)
            cols.append(column)
            vals.append(value)

    if rows and (min(rows) < 0 or min(cols) < 0):
        raise ValueError("Negative indices cannot be exported to scipy")

    if shape is None:
        shape = (max(rows) + 1, matrix.columns + 1) if rows else (0, 0)
    elif rows and (max(rows) >= shape[0] or max(cols) >= shape[1]):
        raise ValueError(f"Stored indices do not fit in shape {shape}")

    logger.debug("Exporting %d sparse cells to scipy with shape %s", len(vals), shape)
    return sp.csr_matrix(
        (np.asarray(vals, dtype=np.float64),
         (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
        shape=shape,
    )
