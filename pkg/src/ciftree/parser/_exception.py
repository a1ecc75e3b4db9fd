"""CIF parser exceptions and error handling."""

from __future__ import annotations

import re
from enum import Enum

from ._position import Position


__all__ = [
    "CIFParseError",
    "CIFParseErrorType",
    "Context",
    "ErrorLevel",
]


_LINE_SPLIT = re.compile(r"\r\n|\r|\n")


class ErrorLevel(Enum):
    """Severity of a diagnostic, from least to most severe.

    The parser only ever produces `BREAKING_ERROR`:
    the first grammar violation aborts parsing.
    The lower tiers exist for collaborators that validate the parsed tree.
    """
    GENERAL_WARNING = 1
    LOOSE_WARNING = 2
    STRICT_WARNING = 3
    INVALID_DATA = 4
    BREAKING_ERROR = 5

    @property
    def is_fatal(self) -> bool:
        return self is ErrorLevel.BREAKING_ERROR


class CIFParseErrorType(Enum):
    """Types of errors that may occur during parsing."""
    MISSING_DATA_BLOCK_HEADER = 1
    MISSING_DATA_ITEM_MARKER = 2
    MISSING_VALUE_OR_LOOP = 3
    UNTERMINATED_SAVE_FRAME = 4
    UNTERMINATED_QUOTED_STRING = 5
    EMPTY_VALUE = 6
    INVALID_VALUE_START = 7
    MISSING_SAVE_FRAME_NAME = 8
    EMPTY_DATA_NAME = 9


class Context:
    """Source location of a diagnostic.

    Either a single position in the document (`Context.position`),
    a span between two positions (`Context.range`),
    or a free text such as a file path (`Context.show`).
    """

    def __init__(
        self,
        *,
        start: Position | None = None,
        end: Position | None = None,
        shown: str | None = None,
    ):
        self.start = start
        self.end = end
        self.shown = shown
        return

    @classmethod
    def position(cls, pos: Position) -> Context:
        """Context pointing at a single position."""
        return cls(start=pos.copy())

    @classmethod
    def range(cls, start: Position, end: Position) -> Context:
        """Context spanning from `start` (inclusive) to `end` (exclusive)."""
        return cls(start=start.copy(), end=end.copy())

    @classmethod
    def show(cls, text: str) -> Context:
        """Context consisting of a free text, e.g. a file path."""
        return cls(shown=text)

    @property
    def is_range(self) -> bool:
        return self.end is not None

    def __str__(self) -> str:
        if self.start is None:
            return "" if self.shown is None else f"  | {self.shown}"
        lines = _LINE_SPLIT.split(self.start.text)
        if self.end is None:
            return self._render(lines, [(self.start.line, self.start.column, self.start.column + 1)])

        last_line = self.end.line
        if self.end.column == 0 and last_line > self.start.line:
            # Span ends right after a line break
            last_line -= 1
        underlines = []
        for line in range(self.start.line, last_line + 1):
            line_length = len(lines[line]) if line < len(lines) else 0
            first = self.start.column if line == self.start.line else 0
            last = self.end.column if line == self.end.line else line_length
            underlines.append((line, first, max(last, first + 1)))
        return self._render(lines, underlines)

    def __repr__(self) -> str:
        if self.start is None:
            return f"Context.show({self.shown!r})"
        if self.end is None:
            return f"Context.position({self.start!r})"
        return f"Context.range({self.start!r}, {self.end!r})"

    @staticmethod
    def _render(lines: list[str], underlines: list[tuple[int, int, int]]) -> str:
        width = len(str(underlines[-1][0] + 1))
        gutter = " " * width
        chunks = [f"{gutter} |"]
        for line, first, last in underlines:
            source = lines[line] if line < len(lines) else ""
            chunks.append(f"{line + 1:>{width}} | {source.replace(chr(9), ' ')}")
            chunks.append(f"{gutter} | {' ' * first}{'^' * (last - first)}")
        return "\n".join(chunks)


class CIFParseError(Exception):
    """Fatal CIF grammar error.

    Attributes
    ----------
    error_type
        Type of the error.
    level
        Severity of the error; always `ErrorLevel.BREAKING_ERROR`.
    context
        Location of the error in the document.
    found
        Short description of the text found at the error location.
    title
        Short title of the error.
    detail
        Human-readable description of the error.
    """

    def __init__(
        self,
        error_type: CIFParseErrorType,
        *,
        context: Context,
        found: str | None = None,
        delimiter: str | None = None,
    ):
        self.error_type = error_type
        self.level = ErrorLevel.BREAKING_ERROR
        self.context = context
        self.found = found
        self.delimiter = delimiter

        error_handler = getattr(self, f"_{error_type.name.lower()}")
        self.title, self.detail = error_handler()
        self.error_msg = f"{self.title}: {self.detail}"
        rendered_context = str(context)
        if rendered_context:
            self.error_msg += f"\n{rendered_context}"
        super().__init__(self.error_msg)
        return

    @property
    def line(self) -> int | None:
        """0-based line where the error starts, if known."""
        return None if self.context.start is None else self.context.start.line

    @property
    def column(self) -> int | None:
        """0-based column where the error starts, if known."""
        return None if self.context.start is None else self.context.start.column

    @property
    def _address(self) -> str:
        if self.context.start is None:
            return "in the document"
        return f"at line {self.context.start.line + 1}, column {self.context.start.column + 1}"

    @property
    def _found(self) -> str:
        return "the end of the document" if self.found is None else repr(self.found)

    def _missing_data_block_header(self) -> tuple[str, str]:
        return (
            "Data block not opened",
            f"The document should start with a data block header 'data_<name>', "
            f"but {self._found} was found {self._address}.",
        )

    def _missing_data_item_marker(self) -> tuple[str, str]:
        detail = (
            f"A data item should start with an underscore '_', "
            f"but {self._found} was found {self._address}."
        )
        if self.found is not None and self.found[:5].lower() == "data_":
            detail += " Only a single data block per document is supported."
        return "No valid data item", detail

    def _missing_value_or_loop(self) -> tuple[str, str]:
        return (
            "No valid value",
            f"A data item should contain a value or a loop, "
            f"but {self._found} was found after the data name.",
        )

    def _unterminated_save_frame(self) -> tuple[str, str]:
        return (
            "No matching 'save_' found",
            f"The save frame opened {self._address} was not closed by a bare 'save_'; "
            f"parsing of its data items stopped at {self._found}.",
        )

    def _unterminated_quoted_string(self) -> tuple[str, str]:
        return (
            "Invalid enclosing",
            f"The value {self._address} was enclosed by {self.delimiter!r} "
            f"but the closing delimiter was not found on the same line.",
        )

    def _empty_value(self) -> tuple[str, str]:
        return (
            "Empty value",
            "A value was expected, but the end of the document was reached.",
        )

    def _invalid_value_start(self) -> tuple[str, str]:
        return (
            "Invalid value",
            "A value should be '.', '?', a string (possibly enclosed), numeric "
            "or a multiline string (starting with ';'), "
            f"but {self._found} {self._address} starts with an invalid character.",
        )

    def _missing_save_frame_name(self) -> tuple[str, str]:
        return (
            "Save frame without name",
            f"A save frame is opened with 'save_<name>', "
            f"but the 'save_' {self._address} has no name.",
        )

    def _empty_data_name(self) -> tuple[str, str]:
        return (
            "Empty data name",
            f"The underscore {self._address} should be directly followed by a data name.",
        )
