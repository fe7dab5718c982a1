"""
Tests for the CLI module.
"""

import json

import gemmi
import pytest

from reflconv.cli.main import app
from reflconv.spec import DEFAULT_SPEC_LINES


class TestCLIPrintSpec:
    """Tests for printing the default spec."""

    def test_print_spec(self, capsys):
        result = app(["print-spec"])
        assert result == 0
        out = capsys.readouterr().out
        assert out.startswith("# Each line in the spec contains four words:")
        assert DEFAULT_SPEC_LINES[0] in out
        assert DEFAULT_SPEC_LINES[-1] in out

    def test_convert_print_spec_flag(self, capsys):
        result = app(["convert", "--print-spec"])
        assert result == 0
        assert "index_h H H 0" in capsys.readouterr().out

    def test_printed_spec_is_loadable(self, capsys, sf_cif_file, tmp_path):
        app(["print-spec"])
        spec_file = tmp_path / "spec.txt"
        spec_file.write_text(capsys.readouterr().out)
        out = tmp_path / "out.mtz"
        result = app(["convert", "--spec", str(spec_file), str(sf_cif_file), str(out)])
        assert result == 0


class TestCLIConvert:
    """Tests for the convert command."""

    def test_convert_first_block(self, sf_cif_file, tmp_path):
        out = tmp_path / "out.mtz"
        result = app(["convert", str(sf_cif_file), str(out)])
        assert result == 0
        mtz = gemmi.read_mtz_file(str(out))
        assert mtz.nreflections == 4
        assert mtz.column_labels()[:4] == ["H", "K", "L", "FreeR_flag"]

    def test_convert_named_block(self, sf_cif_file, tmp_path):
        out = tmp_path / "out.mtz"
        result = app(["convert", "-b", "r1abcBsf", str(sf_cif_file), str(out)])
        assert result == 0
        mtz = gemmi.read_mtz_file(str(out))
        assert "M/ISYM" in mtz.column_labels()

    def test_unmerged_mtz_contents(self, sf_cif_file, tmp_path):
        out = tmp_path / "unmerged.mtz"
        result = app(["convert", "-b", "r1abcBsf", str(sf_cif_file), str(out)])
        assert result == 0

        mtz = gemmi.read_mtz_file(str(out))
        assert mtz.column_labels() == ["H", "K", "L", "M/ISYM", "BATCH", "I", "SIGI"]
        assert [b.number for b in mtz.batches] == [1]
        assert mtz.batches[0].cell.a == pytest.approx(40.0)
        assert list(mtz.column_with_label("BATCH").array) == [1.0, 1.0, 1.0]

        # (-1, 0, 0) is the Friedel mate of (1, 0, 0) under the identity
        assert [mtz.column_with_label(c).array[0] for c in "HKL"] == [1.0, 0.0, 0.0]
        assert mtz.column_with_label("M/ISYM").array[0] == 2.0
        isym = mtz.column_with_label("M/ISYM").array
        assert all(1 <= v <= 8 for v in isym)
        for label in "HKL":
            assert all(v >= 0 for v in mtz.column_with_label(label).array)
        assert mtz.column_with_label("I").array[0] == pytest.approx(10.5)

    def test_title_history_unmerged(self, sf_cif_file, tmp_path):
        out = tmp_path / "out.mtz"
        result = app([
            "convert",
            "--title", "my title",
            "-H", "first line",
            "-H", "second line",
            "--unmerged",
            str(sf_cif_file),
            str(out),
        ])
        assert result == 0
        mtz = gemmi.read_mtz_file(str(out))
        assert mtz.title == "my title"
        assert "second line" in list(mtz.history)
        labels = mtz.column_labels()
        assert labels[3:5] == ["M/ISYM", "BATCH"]
        assert "FreeR_flag" not in labels

    def test_convert_to_parquet(self, sf_cif_file, tmp_path):
        out = tmp_path / "out.parquet"
        result = app(["convert", str(sf_cif_file), str(out)])
        assert result == 0
        assert out.exists()

    def test_convert_dir(self, sf_cif_file, tmp_path):
        out_dir = tmp_path / "mtz"
        result = app(["convert", str(sf_cif_file), "--dir", str(out_dir)])
        assert result == 0
        assert (out_dir / "r1abcsf.mtz").exists()
        assert (out_dir / "r1abcBsf.mtz").exists()

    def test_convert_dir_json(self, sf_cif_file, tmp_path, capsys):
        result = app(["convert", "--json", str(sf_cif_file), "-d", str(tmp_path / "out")])
        assert result == 0
        output = json.loads(capsys.readouterr().out)
        assert output["ok"] is True
        assert [b["block"] for b in output["blocks"]] == ["r1abcsf", "r1abcBsf"]

    def test_convert_dir_partial_failure(self, sf_cif_text, tmp_path):
        cif_file = tmp_path / "in.cif"
        cif_file.write_text(sf_cif_text + "\ndata_nothing\n_cell.length_a 10.0\n")
        out_dir = tmp_path / "mtz"
        result = app(["convert", str(cif_file), "--dir", str(out_dir)])
        assert result == 1
        assert (out_dir / "r1abcsf.mtz").exists()
        assert not (out_dir / "nothing.mtz").exists()

    def test_block_not_found(self, sf_cif_file, tmp_path):
        result = app(["convert", "-b", "nope", str(sf_cif_file), str(tmp_path / "o.mtz")])
        assert result == 1

    def test_missing_index(self, tmp_path):
        cif_file = tmp_path / "in.cif"
        cif_file.write_text(
            "data_x\nloop_\n_refln.index_h\n_refln.index_k\n_refln.F_meas_au\n1 2 3.5\n"
        )
        out = tmp_path / "o.mtz"
        result = app(["convert", str(cif_file), str(out)])
        assert result == 1
        assert not out.exists()

    def test_bad_spec(self, sf_cif_file, tmp_path):
        spec_file = tmp_path / "spec.txt"
        spec_file.write_text("index_h H H 0\nindex_k K H\n")
        out = tmp_path / "o.mtz"
        result = app(["convert", "--spec", str(spec_file), str(sf_cif_file), str(out)])
        assert result == 2
        assert not out.exists()

    def test_write_error(self, sf_cif_file, tmp_path):
        out = tmp_path / "no" / "such" / "dir" / "o.parquet"
        result = app(["convert", str(sf_cif_file), str(out)])
        assert result == 3

    def test_needs_output(self, sf_cif_file):
        result = app(["convert", str(sf_cif_file)])
        assert result == 1

    def test_nonexistent_input(self, tmp_path):
        result = app(["convert", "/nonexistent/file.cif", str(tmp_path / "o.mtz")])
        assert result == 1


class TestCLIBlocks:
    """Tests for the blocks command."""

    def test_blocks(self, sf_cif_file, capsys):
        result = app(["blocks", str(sf_cif_file)])
        assert result == 0
        out = capsys.readouterr().out
        assert "Block: r1abcsf" in out
        assert "_diffrn_refln. (unmerged)" in out

    def test_blocks_json(self, sf_cif_file, capsys):
        result = app(["blocks", "--json", str(sf_cif_file)])
        assert result == 0
        output = json.loads(capsys.readouterr().out)
        assert output[0]["merged"] is True
        assert output[1]["merged"] is False
        assert output[1]["reflections"] == 3


class TestCLIHelp:
    """Tests for CLI help."""

    def test_help_returns_zero(self):
        assert app(["--help"]) == 0

    def test_command_help(self):
        assert app(["convert", "--help"]) == 0
