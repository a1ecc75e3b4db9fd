"""Flat (tabular) representations of a parsed CIF data block."""

import itertools
import warnings
from typing import TypedDict

import polars as pl

from ciftree.exception import CIFTableIncompleteWarning
from ciftree.structure import DataBlock, DataItem, Loop, SaveFrame, as_text
from ciftree.typing import BlockCode, FrameCode, LoopCode


__all__ = [
    "CIFFlatDict",
    "FLAT_SCHEMA",
    "to_flat_dict",
    "to_dataframe",
]


class CIFFlatDict(TypedDict):
    """Flat dictionary representation of a CIF data block.

    Each key corresponds to a column in a table,
    where each row corresponds to a unique data name in the data block.

    Attributes
    ----------
    block_code
        Block code (i.e., data block name) for each data name.
        The same for all rows, since a document holds a single data block.
    frame_code
        Frame code (i.e., save frame name) for each data name.
        For data names not in a save frame, this value is `None`.
    loop_code
        Loop code for each data name.
        A loop code of `0` indicates a single data item
        (i.e., not part of a looped table).
        A positive loop code (1, 2, ...) indicates that the data name
        is part of a looped table, with the same loop code
        shared among all data names in that table.
    loop_name
        Data name of the item introducing the loop (`_<loop_name> loop_`),
        or `None` for single data items.
    data_name
        Data name, without the leading underscore.
    data_values
        List of data values for each data name, rendered as CIF token strings.
        For single data items, this list contains a single string.
        For looped data names, it contains the column of that data name.
    """

    block_code: list[BlockCode]
    frame_code: list[FrameCode]
    loop_code: list[LoopCode]
    loop_name: list[str | None]
    data_name: list[str]
    data_values: list[list[str]]


FLAT_SCHEMA = {
    "block_code": pl.String,
    "frame_code": pl.String,
    "loop_code": pl.Int64,
    "loop_name": pl.String,
    "data_name": pl.String,
    "data_values": pl.List(pl.String),
}
"""Polars schema of the DataFrame returned by `to_dataframe`."""


def to_flat_dict(block: DataBlock) -> CIFFlatDict:
    """Flatten a data block into one row per data name.

    Loop values are distributed over the loop columns in row-major order.
    If the number of values of a loop is not a multiple of its number of data names,
    a `CIFTableIncompleteWarning` is issued and the last row is left incomplete.

    Parameters
    ----------
    block
        Parsed data block.

    Returns
    -------
    CIFFlatDict
        Column-oriented flat representation of the data block.
    """
    output = CIFFlatDict(
        block_code=[],
        frame_code=[],
        loop_code=[],
        loop_name=[],
        data_name=[],
        data_values=[],
    )
    loop_ids = itertools.count(1)

    def add_row(frame_code: FrameCode, loop_id: LoopCode, loop_name: str | None, data_name: str, values: list[str]):
        output["block_code"].append(block.name)
        output["frame_code"].append(frame_code)
        output["loop_code"].append(loop_id)
        output["loop_name"].append(loop_name)
        output["data_name"].append(data_name)
        output["data_values"].append(values)
        return

    def add_item(frame_code: FrameCode, item: DataItem):
        match item.content:
            case Loop(header=header, data=data):
                loop_id = next(loop_ids)
                columns = _fill_loop_columns(header, data, block.name, frame_code, item.name)
                for data_name, column in zip(header, columns):
                    add_row(frame_code, loop_id, item.name, data_name, column)
            case value:
                add_row(frame_code, 0, None, item.name, [as_text(value)])
        return

    for item in block.items:
        match item:
            case SaveFrame(name=frame_code, items=frame_items):
                for frame_item in frame_items:
                    add_item(frame_code, frame_item)
            case DataItem():
                add_item(None, item)
    return output


def to_dataframe(block: DataBlock) -> pl.DataFrame:
    """Flatten a data block into a Polars DataFrame.

    The DataFrame has the columns of `CIFFlatDict`,
    with the types given in `FLAT_SCHEMA`.
    """
    return pl.DataFrame(to_flat_dict(block), schema=FLAT_SCHEMA)


def _fill_loop_columns(
    header: tuple[str, ...],
    data: tuple,
    block_code: str,
    frame_code: str | None,
    loop_name: str,
) -> list[list[str]]:
    columns: list[list[str]] = [[] for _ in header]
    if not columns:
        if data:
            warnings.warn(
                f"Loop '_{loop_name}' in data block 'data_{block_code}' has no data names; "
                f"its {len(data)} values are dropped.",
                CIFTableIncompleteWarning,
                stacklevel=3,
            )
        return columns

    column_cycle = itertools.cycle(columns)
    for value in data:
        next(column_cycle).append(as_text(value))

    if len(data) % len(columns) != 0:
        address = f"data block 'data_{block_code}'"
        if frame_code is not None:
            address += f", save frame 'save_{frame_code}'"
        warnings.warn(
            f"Incomplete table: The loop '_{loop_name}' in {address} has {len(data)} values "
            f"for {len(columns)} data names; its last row is incomplete.",
            CIFTableIncompleteWarning,
            stacklevel=3,
        )
    return columns
