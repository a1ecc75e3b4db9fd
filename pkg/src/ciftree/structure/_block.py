"""CIF data block, save frame, data item and loop structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias, Iterator

import polars as pl

from ciftree.exception import CIFLoopShapeError
from ._value import (
    Inapplicable,
    Unknown,
    Numeric,
    NumericWithUncertainty,
    Value,
    as_float,
    as_text,
)


__all__ = [
    "Loop",
    "MultiValue",
    "DataItem",
    "SaveFrame",
    "Item",
    "DataBlock",
]


@dataclass(frozen=True, slots=True)
class Loop:
    """Looped (tabular) data.

    Attributes
    ----------
    header
        Data names (without the leading underscore) of the loop columns,
        in the order they were declared.
    data
        All data values of the loop, flattened in row-major order.

    Notes
    -----
    The parser does not check that the number of values is a multiple
    of the number of columns; this is checked by `rows`, `columns`
    and `to_dataframe`.
    """

    header: tuple[str, ...] = ()
    data: tuple[Value, ...] = ()

    @property
    def row_count(self) -> int:
        """Number of complete rows in the loop."""
        if not self.header:
            return 0
        return len(self.data) // len(self.header)

    def rows(self) -> list[tuple[Value, ...]]:
        """Reconstruct the rows of the loop.

        Raises
        ------
        CIFLoopShapeError
            If the loop has no columns, or the number of values
            is not a multiple of the number of columns.
        """
        self._check_shape()
        width = len(self.header)
        return [tuple(self.data[i:i + width]) for i in range(0, len(self.data), width)]

    def columns(self) -> dict[str, tuple[Value, ...]]:
        """Reconstruct the columns of the loop, keyed by data name.

        Raises
        ------
        CIFLoopShapeError
            If `rows` would raise, or if a data name is declared twice.
        """
        self._check_shape()
        if len(set(self.header)) != len(self.header):
            duplicates = sorted({name for name in self.header if self.header.count(name) > 1})
            raise CIFLoopShapeError(
                f"Loop declares the data names {duplicates} more than once."
            )
        width = len(self.header)
        return {name: tuple(self.data[idx::width]) for idx, name in enumerate(self.header)}

    def to_dataframe(self) -> pl.DataFrame:
        """Convert the loop to a Polars DataFrame.

        Each data name becomes a column.
        Columns containing only numeric, inapplicable (`.`) and unknown (`?`) values
        are cast to `Float64`, with `.` and `?` as nulls;
        all other columns contain the string rendering of their values.
        """
        series = []
        for name, values in self.columns().items():
            if all(isinstance(value, _NUMERIC_COLUMN_TYPES) for value in values):
                series.append(pl.Series(name, [as_float(value) for value in values], dtype=pl.Float64))
            else:
                series.append(pl.Series(name, [as_text(value) for value in values], dtype=pl.String))
        return pl.DataFrame(series)

    def _check_shape(self) -> None:
        if not self.header:
            raise CIFLoopShapeError("Loop has no data names.")
        if len(self.data) % len(self.header) != 0:
            raise CIFLoopShapeError(
                f"Loop with {len(self.header)} data names has {len(self.data)} values, "
                f"which is not a multiple of the number of data names."
            )
        return


_NUMERIC_COLUMN_TYPES = (Inapplicable, Unknown, Numeric, NumericWithUncertainty)


MultiValue: TypeAlias = Value | Loop
"""Content of a data item: either a single value or a loop."""


@dataclass(frozen=True, slots=True)
class DataItem:
    """CIF data item.

    Attributes
    ----------
    name
        Data name, without the leading underscore.
    content
        Single value or loop.
    """

    name: str
    content: MultiValue

    @property
    def is_loop(self) -> bool:
        """Whether the data item holds a loop."""
        return isinstance(self.content, Loop)


@dataclass(frozen=True, slots=True)
class SaveFrame:
    """CIF save frame: a named group of data items inside a data block."""

    name: str
    items: tuple[DataItem, ...] = field(default=())

    def find(self, name: str) -> DataItem | None:
        """Get the first data item with the given name, or `None`."""
        return next((item for item in self.items if item.name == name), None)

    def __iter__(self) -> Iterator[DataItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


Item: TypeAlias = DataItem | SaveFrame
"""Element of a data block: either a data item or a save frame."""


@dataclass(frozen=True, slots=True)
class DataBlock:
    """CIF data block; the root of a parsed document.

    Attributes
    ----------
    name
        Block code, i.e. the part after `data_` in the block header.
    items
        Data items and save frames, in document order.
    """

    name: str
    items: tuple[Item, ...] = field(default=())

    @property
    def data_items(self) -> tuple[DataItem, ...]:
        """Data items directly under the data block."""
        return tuple(item for item in self.items if isinstance(item, DataItem))

    @property
    def save_frames(self) -> tuple[SaveFrame, ...]:
        """Save frames of the data block."""
        return tuple(item for item in self.items if isinstance(item, SaveFrame))

    def find(self, name: str) -> DataItem | None:
        """Get the first data item directly under the block with the given name, or `None`.

        Data items inside save frames are not searched.
        """
        return next((item for item in self.data_items if item.name == name), None)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
