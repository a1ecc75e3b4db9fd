"""CIF file parser.

Notes
-----
Recursive-descent parser for a single CIF data block:

```
datablock := 'data_' identifier item*
item      := saveframe | dataitem
saveframe := 'save_' identifier dataitem* 'save_'
dataitem  := '_' identifier ( loop | value )
loop      := 'loop_' ( '_' identifier )+ value*
```

Keywords are matched case-insensitively; names keep their original case.
Comments and whitespace are allowed between any two tokens.
Every production either consumes its full input or raises a `CIFParseError`;
the first error aborts parsing.
"""

from ciftree.structure import DataBlock, DataItem, Item, Loop, SaveFrame
from ._exception import CIFParseError, CIFParseErrorType, Context
from ._position import (
    Position,
    advance_to_end,
    at_keyword,
    parse_identifier,
    start_with,
    trim_comments_and_whitespace,
)
from ._value import is_ordinary, parse_value


__all__ = [
    "parse_main",
    "parse_data_block",
    "parse_data_item_or_save_frame",
    "parse_data_item",
    "parse_loop",
]


RESERVED_PREFIXES = ("data_", "loop_", "save_")
"""A bare value can never start with one of these (case-insensitive)."""

RESERVED_WORDS = ("global_", "stop_")
"""A bare value can never be exactly one of these (case-insensitive)."""

_MAX_FOUND_LENGTH = 40


def parse_main(pos: Position) -> DataBlock:
    """Parse a complete document consisting of a single data block."""
    trim_comments_and_whitespace(pos)
    return parse_data_block(pos)


def parse_data_block(pos: Position) -> DataBlock:
    """Parse a data block header followed by data items and save frames up to the end of the document."""
    start = pos.copy()
    if not start_with(pos, "data_"):
        raise CIFParseError(
            CIFParseErrorType.MISSING_DATA_BLOCK_HEADER,
            context=Context.position(pos),
            found=_next_token(pos),
        )
    name = parse_identifier(pos)
    if not name:
        raise CIFParseError(
            CIFParseErrorType.MISSING_DATA_BLOCK_HEADER,
            context=Context.range(start, pos),
            found=_next_token(start),
        )

    items: list[Item] = []
    trim_comments_and_whitespace(pos)
    while not pos.at_end:
        items.append(parse_data_item_or_save_frame(pos))
        trim_comments_and_whitespace(pos)
    return DataBlock(name=name, items=tuple(items))


def parse_data_item_or_save_frame(pos: Position) -> Item:
    """Parse either a save frame (`save_<name> ... save_`) or a single data item."""
    start = pos.copy()
    if not start_with(pos, "save_"):
        return parse_data_item(pos)

    name = parse_identifier(pos)
    if not name:
        raise CIFParseError(
            CIFParseErrorType.MISSING_SAVE_FRAME_NAME,
            context=Context.range(start, pos),
        )
    trim_comments_and_whitespace(pos)

    items: list[DataItem] = []
    while pos.peek() == "_":
        items.append(parse_data_item(pos))
        trim_comments_and_whitespace(pos)

    if at_keyword(pos, "save_"):
        start_with(pos, "save_")
        return SaveFrame(name=name, items=tuple(items))

    found = _next_token(pos)
    end = pos.copy()
    advance_to_end(end)
    raise CIFParseError(
        CIFParseErrorType.UNTERMINATED_SAVE_FRAME,
        context=Context.range(start, end),
        found=found,
    )


def parse_data_item(pos: Position) -> DataItem:
    """Parse a data name followed by either a single value or a loop.

    The cursor is left directly after the value
    (or after the last value of the loop and the whitespace following it).
    """
    start = pos.copy()
    if not start_with(pos, "_"):
        raise CIFParseError(
            CIFParseErrorType.MISSING_DATA_ITEM_MARKER,
            context=Context.position(pos),
            found=_next_token(pos),
        )
    name = parse_identifier(pos)
    if not name:
        raise CIFParseError(CIFParseErrorType.EMPTY_DATA_NAME, context=Context.position(start))
    trim_comments_and_whitespace(pos)

    if at_keyword(pos, "loop_"):
        start_with(pos, "loop_")
        return DataItem(name=name, content=parse_loop(pos))
    if _can_start_value(pos):
        return DataItem(name=name, content=parse_value(pos))
    raise CIFParseError(
        CIFParseErrorType.MISSING_VALUE_OR_LOOP,
        context=Context.range(start, pos),
        found=_next_token(pos),
    )


def parse_loop(pos: Position) -> Loop:
    """Parse the data names and values of a loop, following the `loop_` keyword.

    Values are collected until the next token cannot be a value
    (a data name, a reserved word, or the end of the document).
    The number of values is not checked against the number of data names.
    """
    trim_comments_and_whitespace(pos)
    header: list[str] = []
    while pos.peek() == "_":
        tag_start = pos.copy()
        start_with(pos, "_")
        tag = parse_identifier(pos)
        if not tag:
            raise CIFParseError(CIFParseErrorType.EMPTY_DATA_NAME, context=Context.position(tag_start))
        header.append(tag)
        trim_comments_and_whitespace(pos)
    if not header:
        raise CIFParseError(
            CIFParseErrorType.MISSING_DATA_ITEM_MARKER,
            context=Context.position(pos),
            found=_next_token(pos),
        )

    data = []
    while _can_start_value(pos):
        data.append(parse_value(pos))
        trim_comments_and_whitespace(pos)
    return Loop(header=tuple(header), data=tuple(data))


def _can_start_value(pos: Position) -> bool:
    """Whether the next token is a value (possibly a malformed quoted string)."""
    first_char = pos.peek()
    if first_char == "" or first_char == "_":
        return False
    if first_char in ".?'\";":
        return True
    return is_ordinary(first_char) and not _at_reserved_word(pos)


def _at_reserved_word(pos: Position) -> bool:
    return (
        any(start_with(pos.copy(), prefix) for prefix in RESERVED_PREFIXES)
        or any(at_keyword(pos, word) for word in RESERVED_WORDS)
    )


def _next_token(pos: Position) -> str | None:
    """Text of the next token, for error messages; `None` at the end of the document."""
    if pos.at_end:
        return None
    token = parse_identifier(pos.copy())
    if len(token) > _MAX_FOUND_LENGTH:
        return token[:_MAX_FOUND_LENGTH] + "..."
    return token
