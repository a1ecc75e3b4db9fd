"""Read CIF files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ._util import filelike_to_str
from .exception import CIFFileReadError, CIFFileReadErrorType
from .parser import parse

if TYPE_CHECKING:
    from ciftree.structure import DataBlock
    from ciftree.typing import FileLike, PathLike


__all__ = [
    "open_and_parse",
    "read",
]


def open_and_parse(path: PathLike, *, encoding: str = "utf-8") -> DataBlock:
    """Read a CIF file from disk and parse it.

    The file is read into memory in full before parsing starts.

    Parameters
    ----------
    path
        Path to the CIF file.
    encoding
        Encoding used to decode the file.

    Returns
    -------
    DataBlock
        The parsed data block.

    Raises
    ------
    CIFFileReadError
        If the file cannot be opened, read, or decoded.
    ciftree.parser.CIFParseError
        On the first grammar violation in the file content.
    """
    try:
        content = filelike_to_str(Path(path), encoding=encoding)
    except UnicodeDecodeError as error:
        raise CIFFileReadError(
            CIFFileReadErrorType.DECODE, path=path, encoding=encoding, cause=error
        ) from error
    except OSError as error:
        raise CIFFileReadError(
            CIFFileReadErrorType.OPEN, path=path, encoding=encoding, cause=error
        ) from error
    return parse(content)


def read(file: FileLike, *, encoding: str = "utf-8") -> DataBlock:
    """Parse a CIF document given as content or as a path.

    Parameters
    ----------
    file
        CIF document; a `pathlib.Path` is read from disk
        (see `open_and_parse`), while `str` and `bytes`
        are interpreted as the content of the document.
    encoding
        Encoding used to decode the document if it is provided as bytes or Path.

    Returns
    -------
    DataBlock
        The parsed data block.
    """
    if isinstance(file, Path):
        return open_and_parse(file, encoding=encoding)
    return parse(filelike_to_str(file, encoding=encoding))
