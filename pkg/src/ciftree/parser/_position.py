"""Parser cursor and lexical primitives.

The cursor (`Position`) is a view into the complete document:
the document itself is never sliced or copied while parsing;
consuming characters only moves `offset` forward
and updates the `line` and `column` counters used in diagnostics.

All primitives take the cursor as their first argument
and move it in place.
"""

import re


__all__ = [
    "Position",
    "trim_whitespace",
    "skip_to_eol",
    "trim_comments_and_whitespace",
    "start_with",
    "at_keyword",
    "parse_identifier",
    "consume_line_break",
    "advance_to_end",
    "WHITESPACE",
    "LINE_BREAKS",
]


WHITESPACE = " \t\n\f\r"
"""Characters that delimit tokens."""

LINE_BREAKS = "\r\n"
"""Line terminator characters. A `\\r\\n` pair counts as a single line break."""

_IDENTIFIER = re.compile(r"[^ \t\n\f\r]*")


class Position:
    """Cursor over an in-memory CIF document.

    Attributes
    ----------
    text
        The complete document.
    offset
        Index of the first unconsumed character in `text`.
    line
        0-based line number of the first unconsumed character.
    column
        0-based column of the first unconsumed character;
        reset to 0 after every line break.
    """

    __slots__ = ("text", "offset", "line", "column")

    def __init__(self, text: str, offset: int = 0, line: int = 0, column: int = 0):
        self.text = text
        self.offset = offset
        self.line = line
        self.column = column
        return

    @property
    def remaining(self) -> str:
        """The unconsumed part of the document."""
        return self.text[self.offset:]

    @property
    def at_end(self) -> bool:
        """Whether the whole document has been consumed."""
        return self.offset >= len(self.text)

    def peek(self) -> str:
        """First unconsumed character, or an empty string at the end of the document."""
        return self.text[self.offset:self.offset + 1]

    def startswith(self, prefix: str) -> bool:
        """Whether the unconsumed text starts with `prefix` (case-sensitive)."""
        return self.text.startswith(prefix, self.offset)

    def advance(self, count: int) -> None:
        """Consume `count` characters that contain no line break."""
        self.offset += count
        self.column += count
        return

    def copy(self) -> "Position":
        """Snapshot of the cursor, e.g. to mark the start of an error span."""
        return Position(self.text, self.offset, self.line, self.column)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.text is other.text or self.text == other.text
        ) and (self.offset, self.line, self.column) == (other.offset, other.line, other.column)

    def __repr__(self) -> str:
        return f"Position(offset={self.offset}, line={self.line}, column={self.column})"


def consume_line_break(pos: Position) -> None:
    """Consume one line break (`\\n`, `\\r` or `\\r\\n`) at the cursor."""
    pos.offset += 2 if pos.startswith("\r\n") else 1
    pos.line += 1
    pos.column = 0
    return


def trim_whitespace(pos: Position) -> None:
    """Consume a maximal run of spaces, tabs and line breaks."""
    text = pos.text
    while pos.offset < len(text):
        char = text[pos.offset]
        if char == " " or char == "\t":
            pos.advance(1)
        elif char in LINE_BREAKS:
            consume_line_break(pos)
        else:
            return
    return


def skip_to_eol(pos: Position) -> None:
    """Consume everything up to and including the next line break."""
    text = pos.text
    end = pos.offset
    while end < len(text) and text[end] not in LINE_BREAKS:
        end += 1
    pos.advance(end - pos.offset)
    if not pos.at_end:
        consume_line_break(pos)
    return


def trim_comments_and_whitespace(pos: Position) -> None:
    """Consume whitespace and `#` comments until the next token or the end of the document."""
    while True:
        trim_whitespace(pos)
        if pos.peek() != "#":
            return
        skip_to_eol(pos)


def start_with(pos: Position, pattern: str) -> bool:
    """Consume `pattern` if the unconsumed text starts with it.

    Matching is case-insensitive for ASCII letters.
    `pattern` must be lowercase and must not contain line breaks.

    Returns
    -------
    matched
        Whether the pattern matched; when `False`, the cursor is unchanged.
    """
    chunk = pos.text[pos.offset:pos.offset + len(pattern)]
    if len(chunk) != len(pattern) or not chunk.isascii() or chunk.lower() != pattern:
        return False
    pos.advance(len(pattern))
    return True


def at_keyword(pos: Position, keyword: str) -> bool:
    """Whether the next token is exactly `keyword` (case-insensitive), without consuming it."""
    end = pos.offset + len(keyword)
    chunk = pos.text[pos.offset:end]
    if len(chunk) != len(keyword) or not chunk.isascii() or chunk.lower() != keyword:
        return False
    return end == len(pos.text) or pos.text[end] in WHITESPACE


def parse_identifier(pos: Position) -> str:
    """Consume and return a maximal run of non-whitespace characters (possibly empty)."""
    identifier = _IDENTIFIER.match(pos.text, pos.offset).group()
    pos.advance(len(identifier))
    return identifier


def advance_to_end(pos: Position) -> None:
    """Consume the rest of the document, keeping line and column counters in sync."""
    text = pos.text
    while pos.offset < len(text):
        if text[pos.offset] in LINE_BREAKS:
            consume_line_break(pos)
        else:
            pos.advance(1)
    return
