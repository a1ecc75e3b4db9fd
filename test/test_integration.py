"""Integration tests for complete CIF workflows."""

from pathlib import Path

import polars as pl
import pytest

import ciftree
from ciftree import CIFParseError, CIFParseErrorType
from ciftree.structure import (
    DataItem,
    Inapplicable,
    Loop,
    Numeric,
    NumericWithUncertainty,
    SaveFrame,
    Text,
    as_float,
)


CRYSTAL_CIF = """#\\#CIF_1.1
data_crystal
_chemical_name_common          'Sodium chloride'
_cell_length_a                 5.6402(3)
_cell_angle_alpha              90
_symmetry_space_group_name_H-M 'F m -3 m'
_exptl_special_details
;
 Measured at room temperature.
 Sample: single crystal; cubic.
;
_atom_site loop_
_atom_site_label
_atom_site_type_symbol
_atom_site_fract_x
_atom_site_occupancy
Na1 Na 0.0 1.0   # cation
Cl1 Cl 0.5 .
"""


@pytest.mark.integration
class TestCIFIntegration:
    """Test suite for parsing complete documents."""

    def test_realistic_document(self) -> None:
        """Test parsing a small crystal structure description."""
        block = ciftree.parse(CRYSTAL_CIF)

        assert block.name == "crystal"
        assert [item.name for item in block] == [
            "chemical_name_common",
            "cell_length_a",
            "cell_angle_alpha",
            "symmetry_space_group_name_H-M",
            "exptl_special_details",
            "atom_site",
        ]
        assert block.find("chemical_name_common").content == Text("Sodium chloride")
        assert block.find("symmetry_space_group_name_H-M").content == Text("F m -3 m")
        assert as_float(block.find("cell_angle_alpha").content) == 90.0

        cell_a = block.find("cell_length_a").content
        assert isinstance(cell_a, NumericWithUncertainty)
        assert cell_a.value == pytest.approx(5.6402)
        assert cell_a.uncertainty == 3

        assert block.find("exptl_special_details").content == Text(
            "\n Measured at room temperature.\n Sample: single crystal; cubic.\n"
        )

    def test_loop_to_dataframe(self) -> None:
        """Test converting a parsed loop into a typed DataFrame."""
        atom_site = ciftree.parse(CRYSTAL_CIF).find("atom_site")
        assert atom_site.is_loop
        assert atom_site.content.row_count == 2
        assert atom_site.content.rows()[1][3] == Inapplicable()

        df = atom_site.content.to_dataframe()
        assert df.columns == [
            "atom_site_label",
            "atom_site_type_symbol",
            "atom_site_fract_x",
            "atom_site_occupancy",
        ]
        assert df.schema["atom_site_label"] == pl.String
        assert df["atom_site_fract_x"].to_list() == [0.0, 0.5]
        assert df["atom_site_occupancy"].to_list() == [1.0, None]

    def test_flat_dataframe(self) -> None:
        """Test flattening a document and selecting single items."""
        df = ciftree.to_dataframe(ciftree.parse(CRYSTAL_CIF))
        single = df.filter(pl.col("loop_code") == 0)
        assert single.height == 5
        looped = df.filter(pl.col("loop_code") == 1)
        assert looped["data_name"].to_list()[0] == "atom_site_label"
        assert looped["data_values"].to_list()[0] == ["Na1", "Cl1"]

    def test_file_workflow(self, tmp_path: Path) -> None:
        """Test reading the same document from disk and from memory."""
        path = tmp_path / "crystal.cif"
        path.write_text(CRYSTAL_CIF, encoding="utf-8")
        assert ciftree.read(path) == ciftree.read(CRYSTAL_CIF)

    def test_dictionary_document(self, sample_dict_file_content: str) -> None:
        """Test a dictionary-style document made of save frames."""
        block = ciftree.parse(sample_dict_file_content)
        assert block.data_items == ()
        assert all(isinstance(item, SaveFrame) for item in block)
        category = block.save_frames[0]
        assert category.find("category.mandatory_code") == DataItem(
            name="category.mandatory_code", content=Text("no")
        )

    def test_case_insensitive_keywords(self) -> None:
        """Test keywords are matched regardless of case, while names keep theirs."""
        block = ciftree.parse("DATA_Mixed\nSave_Frame\n_Tag LOOP_ _Col 1 2\nSAVE_\n")
        frame = block.save_frames[0]
        assert block.name == "Mixed"
        assert frame.name == "Frame"
        assert frame.find("Tag").content == Loop(header=("Col",), data=(Numeric(1.0), Numeric(2.0)))

    def test_crlf_document(self) -> None:
        """Test a document with Windows line breaks."""
        block = ciftree.parse("data_a\r\n_x 1\r\n_t\r\n;line1\r\nline2\r\n;\r\n")
        assert block.find("t").content == Text("line1\r\nline2\r\n")

    def test_crlf_error_position(self) -> None:
        """Test line numbers of errors count `\\r\\n` as a single line break."""
        with pytest.raises(CIFParseError) as exc_info:
            ciftree.parse("data_a\r\n_x 1\r\n\r\n  _y\r\n")
        error = exc_info.value
        assert error.error_type is CIFParseErrorType.MISSING_VALUE_OR_LOOP
        assert (error.line, error.column) == (3, 2)
        assert "4 |   _y" in str(error.context)

    def test_multiple_data_blocks_rejected(self) -> None:
        """Test a second data block is reported as an error."""
        with pytest.raises(CIFParseError) as exc_info:
            ciftree.parse("data_a _x 1\ndata_b _y 2")
        error = exc_info.value
        assert error.error_type is CIFParseErrorType.MISSING_DATA_ITEM_MARKER
        assert "single data block" in error.detail
        assert (error.line, error.column) == (1, 0)


@pytest.mark.integration
@pytest.mark.slow
class TestLargeFileIntegration:
    """Test suite for larger documents."""

    def test_large_loop(self) -> None:
        """Test a loop with many rows."""
        rows = "\n".join(f"A{i} {i}.5 {i}(1)" for i in range(5000))
        block = ciftree.parse(f"data_big\n_big loop_\n_label\n_x\n_y\n{rows}\n")
        loop = block.find("big").content
        assert loop.row_count == 5000
        df = loop.to_dataframe()
        assert df.height == 5000
        assert df["x"][4999] == pytest.approx(4999.5)
        assert df.schema["label"] == pl.String
