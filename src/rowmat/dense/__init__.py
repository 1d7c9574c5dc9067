"""Dense row-major matrices and their row iterator."""

from ._matrix import DenseMatrix
from ._iterator import Func, RowIterator

__all__ = [
    'DenseMatrix',
    'RowIterator',
    'Func',
]
