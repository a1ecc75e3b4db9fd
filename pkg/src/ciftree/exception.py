"""Exceptions and warnings raised outside the CIF grammar.

Grammar errors are raised by the parser as
`ciftree.parser.CIFParseError`.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


__all__ = [
    "CIFFileReadError",
    "CIFFileReadErrorType",
    "CIFLoopShapeError",
    "CIFTableIncompleteWarning",
]


class CIFFileReadErrorType(Enum):
    """Types of errors that may occur while reading a CIF file from disk."""
    OPEN = 1
    DECODE = 2


class CIFFileReadError(Exception):
    """Error raised when a CIF file cannot be read into memory.

    Attributes
    ----------
    error_type
        Type of the error.
    path
        Path of the file that could not be read.
    encoding
        Encoding used to decode the file.
    cause
        Original exception.
    """

    def __init__(
        self,
        error_type: CIFFileReadErrorType,
        *,
        path: str | Path,
        encoding: str,
        cause: Exception,
    ):
        self.error_type = error_type
        self.path = Path(path)
        self.encoding = encoding
        self.cause = cause

        error_handler = getattr(self, f"_{error_type.name.lower()}")
        self.error_msg = error_handler()
        super().__init__(self.error_msg)
        return

    def _open(self) -> str:
        """Generate error message for a file that could not be opened."""
        return (
            "Could not open file: "
            f"The file '{self.path}' could not be opened or read ({self.cause}). "
            "Make sure the path is correct, you have permission, "
            "and that it is not locked by another program."
        )

    def _decode(self) -> str:
        """Generate error message for a file that could not be decoded."""
        return (
            "Could not decode file: "
            f"The content of the file '{self.path}' is not valid '{self.encoding}' text "
            f"({self.cause})."
        )


class CIFLoopShapeError(ValueError):
    """Error raised when the values of a loop cannot be arranged into rows."""


class CIFTableIncompleteWarning(UserWarning):
    """Warning issued when the last row of a loop is incomplete."""
