"""
Error handling for rowmat.

Every bounds or shape violation raised by the matrices is a MatrixError
subclass carrying a numeric code. The concrete classes also derive from the
matching builtin (ValueError / IndexError) so plain ``except IndexError``
handlers keep working.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

# Success
ROWMAT_OK = 0

# General errors (1-9)
ROWMAT_ERROR_UNKNOWN = 1

# Shape errors (10-19)
ROWMAT_ERROR_ROW_SIZE = 10

# Index errors (20-29)
ROWMAT_ERROR_ROW_INDEX = 20
ROWMAT_ERROR_COLUMN_INDEX = 21


_ERROR_MESSAGES = {
    ROWMAT_OK: "Success",
    ROWMAT_ERROR_UNKNOWN: "Unknown error",
    ROWMAT_ERROR_ROW_SIZE: "row size does not match number of columns",
    ROWMAT_ERROR_ROW_INDEX: "row index out of bounds",
    ROWMAT_ERROR_COLUMN_INDEX: "column index out of bounds",
}


# =============================================================================
# Exception Classes
# =============================================================================

class MatrixError(Exception):
    """
    Base exception for all rowmat errors.
    """

    OK = ROWMAT_OK
    ERROR_UNKNOWN = ROWMAT_ERROR_UNKNOWN
    ERROR_ROW_SIZE = ROWMAT_ERROR_ROW_SIZE
    ERROR_ROW_INDEX = ROWMAT_ERROR_ROW_INDEX
    ERROR_COLUMN_INDEX = ROWMAT_ERROR_COLUMN_INDEX

    default_code = ROWMAT_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        """
        Create rowmat exception.

        Args:
            message: Optional detailed message (looked up from code if not provided)
            code: Error code, defaults to the class's own code
        """
        if code is None:
            code = self.default_code
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "MatrixError":
        """Create the exception matching ``code`` with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        error_cls = _CODE_TO_CLASS.get(code, cls)
        return error_cls(msg, code)


class RowSizeError(MatrixError, ValueError):
    """Row length does not equal the matrix's column count."""

    default_code = ROWMAT_ERROR_ROW_SIZE


class RowIndexError(MatrixError, IndexError):
    """Row index outside the matrix's current rows."""

    default_code = ROWMAT_ERROR_ROW_INDEX


class ColumnIndexError(MatrixError, IndexError):
    """Column index outside the matrix's columns."""

    default_code = ROWMAT_ERROR_COLUMN_INDEX


_CODE_TO_CLASS = {
    ROWMAT_ERROR_ROW_SIZE: RowSizeError,
    ROWMAT_ERROR_ROW_INDEX: RowIndexError,
    ROWMAT_ERROR_COLUMN_INDEX: ColumnIndexError,
}


__all__ = [
    "ROWMAT_OK",
    "ROWMAT_ERROR_UNKNOWN",
    "ROWMAT_ERROR_ROW_SIZE",
    "ROWMAT_ERROR_ROW_INDEX",
    "ROWMAT_ERROR_COLUMN_INDEX",
    "MatrixError",
    "RowSizeError",
    "RowIndexError",
    "ColumnIndexError",
]
