"""
Data Type Definitions

Provides the closed set of element types a dense matrix can hold.
"""

from typing import Any, Union
from enum import Enum

import numpy as np

__all__ = ['DType', 'float64', 'bool_', 'normalize_dtype', 'numpy_dtype', 'zero_value']


class DType(Enum):
    """
    Rowmat Data Type Enumeration.

    Example:
        >>> from rowmat import DenseMatrix, DType
        >>> mat = DenseMatrix(3, dtype=DType.bool)
        >>>
        >>> # Or use module-level constants
        >>> import rowmat
        >>> mat = DenseMatrix(3, dtype=rowmat.float64)
    """

    float64 = 'float64'
    bool = 'bool'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"


# =============================================================================
# Module-Level Constants (For Clean Syntax)
# =============================================================================

float64 = DType.float64
bool_ = DType.bool


_NUMPY_MAP = {
    DType.float64: np.float64,
    DType.bool: np.bool_,
}

_ZERO_MAP = {
    DType.float64: 0.0,
    DType.bool: False,
}


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType, Any]) -> DType:
    """
    Normalize dtype to a DType member.

    Accepts a DType, its string value, or a numpy dtype / scalar type.

    Example:
        >>> normalize_dtype('float64')
        DType.float64
        >>> normalize_dtype(np.bool_)
        DType.bool
    """
    if isinstance(dtype, DType):
        return dtype
    if isinstance(dtype, str):
        try:
            return DType(dtype)
        except ValueError:
            valid = [e.value for e in DType]
            raise ValueError(f"Invalid dtype: {dtype}. Valid: {valid}") from None

    try:
        np_dtype = np.dtype(dtype)
    except TypeError:
        raise TypeError(f"dtype must be str or DType, got {type(dtype)}") from None

    if np_dtype == np.float64:
        return DType.float64
    if np_dtype == np.bool_:
        return DType.bool
    raise ValueError(f"Unsupported dtype: {np_dtype}")


def numpy_dtype(dtype: Union[str, DType]) -> np.dtype:
    """Numpy dtype backing the given element type."""
    return np.dtype(_NUMPY_MAP[normalize_dtype(dtype)])


def zero_value(dtype: Union[str, DType]):
    """Zero value of the element type (0.0 or False)."""
    return _ZERO_MAP[normalize_dtype(dtype)]
