"""CIF data value parser.

Notes
-----
A value is classified by its first character:

- `.` and `?`: inapplicable and unknown placeholders (one character).
- `'` and `"`: quoted string, ending at the next identical quote on the same line.
- `;`: text field, ending at the next `;` that starts a line.
- Any other ordinary character: bare token, running until the next whitespace.
  Bare tokens matching the numeric grammar become numeric values;
  all others are kept as text.

The numeric grammar is
`[+-]? digits? ('.' digits?)? ([eE] [+-]? digits)? ('(' digits ')')?`,
with at least one digit before or after the decimal point.
Tokens that do not match it in full are never an error; they are text.
"""

import math

from ciftree.structure import (
    Inapplicable,
    Unknown,
    Numeric,
    NumericWithUncertainty,
    Text,
    Value,
)
from ._exception import CIFParseError, CIFParseErrorType, Context
from ._position import (
    Position,
    LINE_BREAKS,
    consume_line_break,
    parse_identifier,
)


__all__ = [
    "is_ordinary",
    "parse_value",
    "parse_enclosed",
    "parse_multiline_string",
    "parse_numeric",
]


_DIGITS = "0123456789"
_NON_ORDINARY = "#$'\"_[];"


def is_ordinary(char: str) -> bool:
    """Whether `char` may start a bare (unquoted) value.

    Ordinary characters are the printable ASCII characters,
    except for whitespace and the CIF punctuation characters `#$'"_[];`.
    """
    return len(char) == 1 and "!" <= char <= "~" and char not in _NON_ORDINARY


def parse_value(pos: Position) -> Value:
    """Parse a single data value at the cursor.

    Raises
    ------
    CIFParseError
        - `EMPTY_VALUE` at the end of the document.
        - `INVALID_VALUE_START` if the next character cannot start a value.
        - `UNTERMINATED_QUOTED_STRING` if a quoted string contains a line break.

        On error, the cursor is unchanged.
    """
    first_char = pos.peek()
    if first_char == "":
        raise CIFParseError(CIFParseErrorType.EMPTY_VALUE, context=Context.position(pos))
    if first_char == ".":
        pos.advance(1)
        return Inapplicable()
    if first_char == "?":
        pos.advance(1)
        return Unknown()
    if first_char == "'" or first_char == '"':
        return Text(parse_enclosed(pos, first_char))
    if first_char == ";":
        return Text(parse_multiline_string(pos))
    if is_ordinary(first_char):
        token = parse_identifier(pos)
        numeric = parse_numeric(token)
        return Text(token) if numeric is None else numeric

    start = pos.copy()
    raise CIFParseError(
        CIFParseErrorType.INVALID_VALUE_START,
        context=Context.position(start),
        found=parse_identifier(start),
    )


def parse_enclosed(pos: Position, delimiter: str) -> str:
    """Parse a string enclosed by `delimiter`, which must be the next character.

    Returns
    -------
    text
        Content between the delimiters.
        If the end of the document is reached before the closing delimiter,
        the rest of the document (including the opening delimiter) is returned.

    Raises
    ------
    CIFParseError
        `UNTERMINATED_QUOTED_STRING` if a line break is found before the closing delimiter.
        The error spans from the opening delimiter through the line break,
        and the cursor is unchanged.
    """
    text = pos.text
    start = pos.offset
    for idx in range(start + 1, len(text)):
        char = text[idx]
        if char == delimiter:
            pos.advance(idx + 1 - start)
            return text[start + 1:idx]
        if char in LINE_BREAKS:
            end = pos.copy()
            end.advance(idx - start)
            consume_line_break(end)
            raise CIFParseError(
                CIFParseErrorType.UNTERMINATED_QUOTED_STRING,
                context=Context.range(pos, end),
                found=text[start:idx],
                delimiter=delimiter,
            )
    # Lenient: an unclosed string at the end of the document takes the remainder
    remainder = text[start:]
    pos.advance(len(remainder))
    return remainder


def parse_multiline_string(pos: Position) -> str:
    """Parse a text field, opened by a `;` which must be the next character.

    The text field ends at the first `;` directly following a line break.

    Returns
    -------
    text
        Content between the delimiting semicolons, including all line breaks.
        If the end of the document is reached before the closing semicolon,
        the rest of the document (including the opening semicolon) is returned.
    """
    text = pos.text
    start = pos.offset
    pos.advance(1)
    after_break = False
    while pos.offset < len(text):
        char = text[pos.offset]
        if after_break and char == ";":
            content = text[start + 1:pos.offset]
            pos.advance(1)
            return content
        if char in LINE_BREAKS:
            consume_line_break(pos)
            after_break = True
        else:
            pos.advance(1)
            after_break = False
    # Lenient: an unclosed text field at the end of the document takes the remainder
    return text[start:]


def parse_numeric(token: str) -> Numeric | NumericWithUncertainty | None:
    """Evaluate a bare token against the CIF numeric grammar.

    Parameters
    ----------
    token
        Complete bare token, e.g. `-1.25e-3(4)`.

    Returns
    -------
    value
        The numeric value, or `None` if the token does not match
        the numeric grammar in full.
    """
    idx = 0
    length = len(token)

    negative = False
    if idx < length and token[idx] in "+-":
        negative = token[idx] == "-"
        idx += 1

    integer_start = idx
    integer = 0
    while idx < length and token[idx] in _DIGITS:
        integer = integer * 10 + (ord(token[idx]) - 48)
        idx += 1
    integer_set = idx > integer_start

    decimal_set = False
    decimal = 0.0
    if idx < length and token[idx] == ".":
        idx += 1
        power = 1.0
        while idx < length and token[idx] in _DIGITS:
            # Accumulated digit by digit, not parsed as a whole
            power *= 10.0
            decimal += (ord(token[idx]) - 48) / power
            decimal_set = True
            idx += 1

    if not (integer_set or decimal_set):
        return None

    exponent: int | None = None
    if idx < length and token[idx] in "eE":
        idx += 1
        exponent_negative = False
        if idx < length and token[idx] in "+-":
            exponent_negative = token[idx] == "-"
            idx += 1
        exponent_start = idx
        exponent = 0
        while idx < length and token[idx] in _DIGITS:
            exponent = exponent * 10 + (ord(token[idx]) - 48)
            idx += 1
        if idx == exponent_start:
            return None
        if exponent_negative:
            exponent = -exponent

    uncertainty: int | None = None
    if idx < length and token[idx] == "(":
        idx += 1
        uncertainty_start = idx
        while idx < length and token[idx] in _DIGITS:
            idx += 1
        if idx == uncertainty_start or idx == length or token[idx] != ")":
            return None
        uncertainty = int(token[uncertainty_start:idx])
        idx += 1

    if idx != length:
        return None

    number = _to_float(integer) + decimal
    if negative:
        number = -number
    if exponent is not None:
        number = _scale(number, exponent)

    if uncertainty is None:
        return Numeric(number)
    return NumericWithUncertainty(number, uncertainty)


def _to_float(integer: int) -> float:
    try:
        return float(integer)
    except OverflowError:
        return math.inf


def _scale(number: float, exponent: int) -> float:
    """Multiply `number` by `10 ** exponent`, saturating to infinity or zero when out of range."""
    if number == 0.0:
        return number
    try:
        return number * 10.0 ** exponent
    except OverflowError:
        return math.copysign(0.0 if exponent < 0 else math.inf, number)
