"""CIF data values.

A data value is exactly one of:

- `Inapplicable`: the `.` placeholder.
- `Unknown`: the `?` placeholder.
- `Numeric`: a bare token matching the CIF numeric grammar.
- `NumericWithUncertainty`: a numeric token with a
  parenthesised standard uncertainty suffix, e.g. `1.234(5)`.
- `Text`: any other token, quoted string, or text field.
"""

from dataclasses import dataclass
from typing import TypeAlias


__all__ = [
    "Inapplicable",
    "Unknown",
    "Numeric",
    "NumericWithUncertainty",
    "Text",
    "Value",
    "as_float",
    "as_text",
]


@dataclass(frozen=True, slots=True)
class Inapplicable:
    """Inapplicable data value (`.`)."""

    def __str__(self) -> str:
        return "."


@dataclass(frozen=True, slots=True)
class Unknown:
    """Unknown data value (`?`)."""

    def __str__(self) -> str:
        return "?"


@dataclass(frozen=True, slots=True)
class Numeric:
    """Numeric data value without uncertainty."""

    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class NumericWithUncertainty:
    """Numeric data value with a standard uncertainty.

    Attributes
    ----------
    value
        Numeric value.
    uncertainty
        Standard uncertainty, in units of the least significant digit
        of the value as written in the file, e.g. `5` for `1.234(5)`.
    """

    value: float
    uncertainty: int

    def __str__(self) -> str:
        return f"{self.value!r}({self.uncertainty})"


@dataclass(frozen=True, slots=True)
class Text:
    """Textual data value."""

    text: str

    def __str__(self) -> str:
        return self.text


Value: TypeAlias = Inapplicable | Unknown | Numeric | NumericWithUncertainty | Text
"""A single CIF data value."""


def as_float(value: Value) -> float | None:
    """Get the numeric content of a data value.

    Parameters
    ----------
    value
        Data value.

    Returns
    -------
    number
        The float of a `Numeric` or `NumericWithUncertainty` value,
        `None` for any other value.
    """
    match value:
        case Numeric(number) | NumericWithUncertainty(number, _):
            return number
        case Inapplicable() | Unknown() | Text():
            return None
    raise TypeError(f"Expected a CIF data value, but got {type(value)}: {value!r}.")


def as_text(value: Value) -> str:
    """Render a data value as a CIF token string.

    Numeric values are rendered from their parsed float,
    so the result may differ textually from the original token
    (e.g. `1e3` is rendered as `1000.0`).
    """
    match value:
        case Inapplicable() | Unknown() | Numeric() | NumericWithUncertainty() | Text():
            return str(value)
    raise TypeError(f"Expected a CIF data value, but got {type(value)}: {value!r}.")
