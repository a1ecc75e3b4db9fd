"""CIFTree: parse Crystallographic Information Files into an intermediate tree.

A CIF document holding a single data block is parsed
into an immutable `DataBlock`, whose items are data items and save frames.
Each data item holds either a single value or a loop.

References
----------
- [Official CIF specification](https://www.iucr.org/resources/cif/spec)
- [CIF 1.1 syntax](https://www.iucr.org/resources/cif/spec/version1.1/cifsyntax)
"""

from . import parser, structure
from .exception import (
    CIFFileReadError,
    CIFFileReadErrorType,
    CIFLoopShapeError,
    CIFTableIncompleteWarning,
)
from .parser import CIFParseError, CIFParseErrorType, parse, to_dataframe, to_flat_dict
from .reader import open_and_parse, read
from .structure import (
    DataBlock,
    DataItem,
    Loop,
    SaveFrame,
    Inapplicable,
    Unknown,
    Numeric,
    NumericWithUncertainty,
    Text,
)

__all__ = [
    "parser",
    "structure",
    "parse",
    "open_and_parse",
    "read",
    "to_dataframe",
    "to_flat_dict",
    "CIFFileReadError",
    "CIFFileReadErrorType",
    "CIFLoopShapeError",
    "CIFParseError",
    "CIFParseErrorType",
    "CIFTableIncompleteWarning",
    "DataBlock",
    "DataItem",
    "Loop",
    "SaveFrame",
    "Inapplicable",
    "Unknown",
    "Numeric",
    "NumericWithUncertainty",
    "Text",
]
