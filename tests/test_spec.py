"""
Tests for conversion spec loading.
"""

import pytest

from reflconv.enums import ColumnKind
from reflconv.errors import SpecSyntaxError
from reflconv.spec import (
    DEFAULT_SPEC_LINES,
    SPEC_HEADER,
    default_spec,
    load_spec,
    parse_spec_line,
    parse_spec_lines,
)


class TestDefaultSpec:
    """Tests for the built-in spec."""

    def test_default_spec_entries(self):
        """Test that every default line becomes an entry."""
        spec = default_spec()
        assert len(spec) == len(DEFAULT_SPEC_LINES)
        first = spec.entries[0]
        assert first.source_tag == "index_h"
        assert first.target_label == "H"
        assert first.kind is ColumnKind.INDEX

    def test_default_spec_is_cached(self):
        """Test that the default spec is built once."""
        assert default_spec() is default_spec()

    def test_status_entry(self):
        """Test the 's' pseudo-type."""
        status = [e for e in default_spec() if e.source_tag == "status"][0]
        assert status.kind is ColumnKind.STATUS_FLAG
        assert status.type_code == "s"
        assert status.column_type == "I"
        assert status.target_label == "FreeR_flag"

    def test_alternatives_are_consecutive(self):
        """Test that alternative tags share a label on adjacent lines."""
        labels = [e.target_label for e in default_spec()]
        i = labels.index("FOM")
        assert labels[i + 1] == "FOM"
        assert "FOM" not in labels[i + 2 :]

    def test_labels(self):
        """Test distinct labels in order."""
        labels = default_spec().labels()
        assert labels[:5] == ["H", "K", "L", "FreeR_flag", "I"]
        assert labels.count("FOM") == 1

    def test_format_round_trip(self):
        """Test that printed spec text parses back to the same spec."""
        text = default_spec().format()
        assert text.startswith(SPEC_HEADER)
        assert parse_spec_lines(text.splitlines()) == default_spec()


class TestSpecParsing:
    """Tests for spec line parsing."""

    def test_parse_line(self):
        """Test parsing a valid line."""
        entry = parse_spec_line("F_meas_au FP F 1")
        assert entry.source_tag == "F_meas_au"
        assert entry.target_label == "FP"
        assert entry.type_code == "F"
        assert entry.dataset_id == 1
        assert entry.kind is ColumnKind.NUMERIC

    def test_three_words(self):
        """Test that a line with three words is rejected."""
        with pytest.raises(SpecSyntaxError) as exc_info:
            parse_spec_lines(["index_h H H 0", "F_meas_au FP F"])
        assert exc_info.value.line_number == 2
        assert "4 words" in exc_info.value.reason

    def test_long_type(self):
        """Test that a multi-character type is rejected."""
        with pytest.raises(SpecSyntaxError):
            parse_spec_line("F_meas_au FP FF 1")

    def test_bad_dataset(self):
        """Test that datasets other than 0 and 1 are rejected."""
        with pytest.raises(SpecSyntaxError):
            parse_spec_line("F_meas_au FP F 2")
        with pytest.raises(SpecSyntaxError):
            parse_spec_line("F_meas_au FP F 01")

    def test_blank_and_comment_lines(self):
        """Test that blank and comment lines are skipped."""
        spec = parse_spec_lines(["", "# comment", "  ", "index_h H H 0", "\t"])
        assert len(spec) == 1

    def test_non_consecutive_alternatives(self):
        """Test that a label reappearing later is rejected."""
        with pytest.raises(SpecSyntaxError) as exc_info:
            parse_spec_lines(["fom FOM W 1", "F_calc FC F 1", "weight FOM W 1"])
        assert exc_info.value.line_number == 3

    def test_error_aborts_whole_spec(self):
        """Test that no partial spec is returned."""
        with pytest.raises(SpecSyntaxError):
            parse_spec_lines(["index_h H H 0", "index_k K H 0", "bad line"])


class TestLoadSpec:
    """Tests for loading spec files."""

    def test_load_file(self, tmp_path):
        """Test loading a spec file."""
        spec_file = tmp_path / "spec.txt"
        spec_file.write_text(
            "index_h H H 0\nindex_k K H 0\nindex_l L H 0\n\nF_meas_au FP F 1\n"
        )
        spec = load_spec(spec_file)
        assert [e.target_label for e in spec] == ["H", "K", "L", "FP"]

    def test_load_bad_file(self, tmp_path):
        """Test that a bad line in a file fails the load."""
        spec_file = tmp_path / "spec.txt"
        spec_file.write_text("index_h H H 0\nindex_k K H\n")
        with pytest.raises(SpecSyntaxError) as exc_info:
            load_spec(spec_file)
        assert exc_info.value.line_number == 2

    def test_missing_file(self, tmp_path):
        """Test loading a file that doesn't exist."""
        with pytest.raises(FileNotFoundError):
            load_spec(tmp_path / "nope.txt")
