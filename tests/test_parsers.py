"""
Tests for the mmCIF reflection parser and value predicates.
"""

import gzip
import math

import pytest

from reflconv.parsers import (
    CifReflnParser,
    ReflnTable,
    as_int,
    as_number,
    is_null,
)


class TestValues:
    """Tests for value-token predicates."""

    def test_is_null(self):
        assert is_null("?")
        assert is_null(".")
        assert not is_null("0")
        assert not is_null("abc")

    def test_as_number(self):
        assert as_number("1.5") == pytest.approx(1.5)
        assert as_number("-2e3") == pytest.approx(-2000.0)
        assert as_number("45.0(2)") == pytest.approx(45.0)
        assert math.isnan(as_number("abc"))

    def test_as_int(self):
        assert as_int("-3") == -3
        assert as_int("12") == 12
        with pytest.raises(ValueError):
            as_int("x")


class TestReflnTable:
    """Tests for the in-memory table."""

    def test_table_shape(self):
        table = ReflnTable(
            block_name="b",
            tags=["_refln.index_h", "_refln.index_k"],
            values=["1", "2", "3", "4", "5", "6"],
        )
        assert table.width == 2
        assert table.length == 3
        assert table.category == "_refln."

    def test_find_tag(self):
        table = ReflnTable(block_name="b", tags=["_refln.index_h", "_refln.F_meas_au"])
        assert table.find_tag("_refln.F_meas_au") == 1
        assert table.find_tag("_REFLN.f_meas_AU") == 1
        assert table.find_tag("_refln.index_l") is None

    def test_empty_table(self):
        table = ReflnTable(block_name="b")
        assert not table.has_loop
        assert table.length == 0
        assert table.category == ""


class TestCifReflnParser:
    """Tests for CifReflnParser."""

    def test_parse_content(self, sf_cif_text):
        """Test both blocks are read with their loops."""
        tables = CifReflnParser().parse_content(sf_cif_text)
        assert [t.block_name for t in tables] == ["r1abcsf", "r1abcBsf"]

        merged = tables[0]
        assert merged.is_merged
        assert merged.category == "_refln."
        assert merged.length == 4
        assert merged.width == 9
        assert merged.values[3:6] == ["0", "0", "2"]

        unmerged = tables[1]
        assert not unmerged.is_merged
        assert unmerged.category == "_diffrn_refln."
        assert unmerged.length == 3

    def test_block_metadata(self, sf_cif_text):
        """Test cell, space group and wavelength."""
        table = CifReflnParser().parse_content(sf_cif_text)[0]
        assert table.cell.a == pytest.approx(40.0)
        assert table.cell.c == pytest.approx(60.0)
        assert table.spacegroup.replace(" ", "") == "P212121"
        assert table.wavelength == pytest.approx(0.9792)

    def test_parse_file(self, sf_cif_file):
        tables = CifReflnParser().parse(sf_cif_file)
        assert len(tables) == 2

    def test_parse_gzipped_file(self, sf_cif_text, tmp_path):
        path = tmp_path / "r1abcsf.ent.gz"
        with gzip.open(path, "wt") as f:
            f.write(sf_cif_text)
        tables = CifReflnParser().parse(path)
        assert tables[0].length == 4

    def test_block_without_loop(self):
        """Test that blocks without reflections are kept, with no tags."""
        tables = CifReflnParser().parse_content("data_empty\n_cell.length_a 10.0\n")
        assert len(tables) == 1
        assert not tables[0].has_loop

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CifReflnParser().parse(tmp_path / "missing.cif")

    def test_invalid_cif(self):
        with pytest.raises(ValueError):
            CifReflnParser().parse_content("this is not cif\n")
