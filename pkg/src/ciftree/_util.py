"""Helpers for turning CIF inputs into document text."""

from pathlib import Path

from .typing import FileLike


_BYTE_ORDER_MARK = "\ufeff"


def filelike_to_str(file: FileLike, encoding: str = "utf-8") -> str:
    """Get the document text of a CIF input.

    Parameters
    ----------
    file
        Path of a CIF file, or the document content as `bytes` or `str`.
    encoding
        Text encoding of the file or the bytes.

    Returns
    -------
    document
        Full document text, without a leading byte-order mark.

    Raises
    ------
    ValueError
        If `file` is of an unsupported type.
    """
    match file:
        case Path():
            content = file.read_text(encoding=encoding)
        case bytes():
            content = file.decode(encoding)
        case str():
            content = file
        case _:
            raise ValueError(
                "A CIF input must be a pathlib.Path, bytes or str, "
                f"but got {type(file).__name__}: {file!r}."
            )
    return strip_byte_order_mark(content)


def strip_byte_order_mark(content: str) -> str:
    """Remove a leading Unicode byte-order mark, if any."""
    return content.removeprefix(_BYTE_ORDER_MARK)
