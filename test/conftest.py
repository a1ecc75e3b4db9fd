"""Fixtures and helpers for the CIFTree test suite."""

from pathlib import Path

import pytest

from ciftree.parser import Position


# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def sample_cif1_content() -> str:
    """Sample CIF content with single items, a loop, and comments.

    Returns
    -------
    str
        A small CIF document containing one data block.
    """
    return """
# Sample structure
data_test_block
_single_item_1  'value1'
_single_item_2  10.5(3)
_single_item_3  ?

_atoms loop_
_atom_label
_atom_x
_atom_occupancy
C1  0.1234(5)  1.0
N1  0.2345(6)  .
O1  -0.5     ?
"""


@pytest.fixture
def sample_dict_file_content() -> str:
    """Sample CIF dictionary-like content with save frames.

    Returns
    -------
    str
        A CIF document with save frames.
    """
    return """
data_test_dictionary

save_test_category
    _category.description  'Test category description'
    _category.id  test_category
    _category.mandatory_code  no

    _keys loop_
    _category_key.name
    'test_category.id'
save_

save_test_category.id
    _item.name  'test_category.id'
    _item.category_id  test_category
    _item_description.text
;
    Identifier of the test category.
;
save_
"""


@pytest.fixture
def temp_cif_file(tmp_path: Path, sample_cif1_content: str) -> Path:
    """Write the sample CIF content to a file in a per-test directory.

    Returns
    -------
    Path
        Path to the written `.cif` file.
    """
    path = tmp_path / "sample.cif"
    path.write_text(sample_cif1_content, encoding="utf-8")
    return path


# ============================================================================
# Test Utilities
# ============================================================================


def assert_position(pos: Position, remaining: str, line: int, column: int) -> None:
    """Assert the remaining text and counters of a cursor.

    Parameters
    ----------
    pos : Position
        Cursor to check.
    remaining : str
        Expected unconsumed text.
    line : int
        Expected 0-based line.
    column : int
        Expected 0-based column.

    Raises
    ------
    AssertionError
        If any of the values differs.
    """
    assert pos.remaining == remaining, "Different remaining text"
    assert pos.line == line, "Different line"
    assert pos.column == column, "Different column"
