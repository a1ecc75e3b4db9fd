"""CIF intermediate tree.

The parser returns a `DataBlock`, whose items are `DataItem`s and `SaveFrame`s.
Each `DataItem` holds either a single `Value` or a `Loop`.
All structures are immutable.
"""

from ._block import DataBlock, DataItem, Item, Loop, MultiValue, SaveFrame
from ._value import (
    Inapplicable,
    Unknown,
    Numeric,
    NumericWithUncertainty,
    Text,
    Value,
    as_float,
    as_text,
)

__all__ = [
    "DataBlock",
    "DataItem",
    "Item",
    "Loop",
    "MultiValue",
    "SaveFrame",
    "Inapplicable",
    "Unknown",
    "Numeric",
    "NumericWithUncertainty",
    "Text",
    "Value",
    "as_float",
    "as_text",
]
