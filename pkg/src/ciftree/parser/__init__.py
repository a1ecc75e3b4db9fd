"""CIF file parser."""

from ciftree.structure import DataBlock

from ._exception import CIFParseError, CIFParseErrorType, Context, ErrorLevel
from ._output import CIFFlatDict, FLAT_SCHEMA, to_dataframe, to_flat_dict
from ._parser import parse_main
from ._position import Position
from ._value import parse_numeric

__all__ = [
    "CIFFlatDict",
    "CIFParseError",
    "CIFParseErrorType",
    "Context",
    "ErrorLevel",
    "FLAT_SCHEMA",
    "Position",
    "parse",
    "parse_numeric",
    "to_dataframe",
    "to_flat_dict",
]


def parse(text: str) -> DataBlock:
    """Parse CIF content into a data block.

    Parameters
    ----------
    text
        Complete content of a CIF document
        containing exactly one data block.

    Returns
    -------
    DataBlock
        The parsed data block.

    Raises
    ------
    CIFParseError
        On the first grammar violation in the document.
    """
    return parse_main(Position(text))
