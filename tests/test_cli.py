"""
Tests for the command-line interface.
"""

import argparse
import json
import subprocess
import sys

import pytest

from bikeframe.cli.generate import main, parse_override


class TestCLIEntryPoints:
    """Test that CLI entry points defined in pyproject.toml are importable."""

    def test_entry_point_importable(self):
        """The main function is importable."""
        from bikeframe.cli.generate import main
        assert callable(main)

    def test_entry_point_via_subprocess(self):
        """Test entry point works when invoked as module."""
        result = subprocess.run(
            [sys.executable, "-m", "bikeframe.cli.generate", "--help"],
            capture_output=True,
            text=True
        )
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()


class TestParseOverride:
    """Tests for --set value parsing."""

    @pytest.mark.parametrize("text, expected", [
        ("S_length=40", ("S_length", 40)),
        ("D_angle=-15.5", ("D_angle", -15.5)),
        ("isRHD=true", ("isRHD", True)),
        ("name=fixie", ("name", "fixie")),
        (" A_length = 50", ("A_length", 50)),
    ])
    def test_values(self, text, expected):
        """Values are parsed as numbers, booleans or strings."""
        assert parse_override(text) == expected

    @pytest.mark.parametrize("text", ["S_length", "=5"])
    def test_rejects_malformed(self, text):
        """Overrides without a name and value are rejected."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_override(text)


class TestCLIBasic:
    """Basic CLI tests."""

    def test_requires_input(self):
        """Running with no input exits with a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_missing_file(self, tmp_path, capsys):
        """A missing parameter file reports an error."""
        assert main([str(tmp_path / "nonexistent.json")]) == 1
        assert "Error loading parameters" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path):
        """Malformed JSON reports an error."""
        invalid_file = tmp_path / "invalid.json"
        invalid_file.write_text("not valid json {")
        assert main([str(invalid_file)]) == 1

    def test_missing_required_parameters(self, tmp_path):
        """An incomplete parameter file reports an error."""
        partial = tmp_path / "partial.json"
        partial.write_text(json.dumps({"A_length": 20.0}))
        assert main([str(partial)]) == 1

    def test_impossible_frame(self, capsys):
        """A frame that cannot be solved reports its error code."""
        assert main(["--preset", "default", "--set", "B_drop=100"]) == 1
        assert "CHAINSTAY_TOO_SHORT" in capsys.readouterr().err


class TestCLIGeneration:
    """Tests for geometry generation via CLI."""

    def test_preset_summary(self, capsys):
        """A preset prints the summary."""
        assert main(["--preset", "default"]) == 0
        out = capsys.readouterr().out
        assert "Bicycle Frame Geometry" in out

    def test_quiet(self, capsys):
        """--quiet suppresses the summary."""
        assert main(["--preset", "default", "--quiet"]) == 0
        assert capsys.readouterr().out == ""

    def test_file_with_outputs(self, temp_params_file, tmp_path):
        """Geometry, markdown and chain outputs are written."""
        geometry_path = tmp_path / "geometry.json"
        markdown_path = tmp_path / "frame.md"
        code = main([
            str(temp_params_file),
            "-o", str(geometry_path),
            "--markdown", str(markdown_path),
            "--chain",
            "-q",
        ])
        assert code == 0

        data = json.loads(geometry_path.read_text())
        assert data["sizes"]["W1_size"] == pytest.approx(14.1)
        assert data["validation"]["valid"] is True
        assert len(data["chain_path"]) > 0
        assert markdown_path.read_text().startswith("# Bicycle Frame Geometry")

    def test_file_overrides_preset(self, tmp_path):
        """File values override the preset."""
        partial = tmp_path / "partial.json"
        partial.write_text(json.dumps({"wheels": {"R1_size": 15.0}}))
        geometry_path = tmp_path / "geometry.json"
        assert main(["--preset", "default", str(partial), "-o", str(geometry_path), "-q"]) == 0
        assert json.loads(geometry_path.read_text())["sizes"]["R1_size"] == 15.0

    def test_set_overrides_file(self, temp_params_file, tmp_path):
        """--set values override the file."""
        params_path = tmp_path / "resolved.json"
        code = main([str(temp_params_file), "--set", "D1_count=11", "--save-params", str(params_path), "-q"])
        assert code == 0
        saved = json.loads(params_path.read_text())
        assert saved["D1_count"] == 11
        assert saved["S_length"] == 17.0

    def test_validate_only(self, temp_params_file, tmp_path, capsys):
        """--validate-only prints messages and writes no geometry."""
        geometry_path = tmp_path / "geometry.json"
        assert main([str(temp_params_file), "--validate-only", "-o", str(geometry_path)]) == 0
        out = capsys.readouterr().out
        assert "WHEELS_OVERLAP" in out
        assert not geometry_path.exists()
