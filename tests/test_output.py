"""
Tests for JSON, Markdown and summary output.
"""

import json

import pytest

from bikeframe.calculator import (
    calculate_chain_path,
    to_json,
    to_markdown,
    to_summary,
    validate_parameters,
)
from bikeframe.io import SCHEMA_VERSION


class TestToJson:
    """Tests for JSON output."""

    def test_basic(self, example_geometry):
        """JSON holds the geometry sections and no extras by default."""
        data = json.loads(to_json(example_geometry))
        assert data["schema_version"] == SCHEMA_VERSION
        assert "points" in data
        assert "sizes" in data
        assert "rotations" in data
        assert "frameMembers" in data
        assert "spokePatterns" in data
        assert "validation" not in data
        assert "chain_path" not in data

    def test_keys_are_camel_case(self, example_geometry):
        """Geometry keys use the names the JavaScript renderer reads."""
        data = json.loads(to_json(example_geometry))
        assert set(data["rotations"]) == {"wheelbase", "wheelTangent", "total"}
        assert set(data["handlebarRotations"]) == {"userRotation", "stemAlignment", "totalLocal"}
        assert set(data["spokePatterns"]["rear"]) == {"points", "spokes"}
        assert set(data["spokePatterns"]["rear"]["points"]) == {
            "hubPointsRight", "hubPointsLeft", "rimPointsRight", "rimPointsLeft",
        }
        assert set(data["spokePatterns"]["rear"]["spokes"]["red"][0]) == {"start", "end", "hubIndex", "rimIndex"}

    def test_params_keep_domain_names(self, example_geometry):
        """Parameter names are not camel-cased."""
        params = json.loads(to_json(example_geometry))["params"]
        assert params["B_length"] == 20.0
        assert "isRHD" in params

    def test_sizes(self, example_geometry):
        """All sizes are exported."""
        sizes = json.loads(to_json(example_geometry))["sizes"]
        for key in ("W1_size", "W2_size", "D1_size", "D2_size", "R1_size", "R2_size", "bbHeight"):
            assert key in sizes
        assert sizes["W1_size"] == pytest.approx(14.1)

    def test_with_validation(self, example_geometry):
        """Validation messages are included when given."""
        validation = validate_parameters(example_geometry.params)
        data = json.loads(to_json(example_geometry, validation))
        assert data["validation"]["valid"] is True
        assert data["validation"]["messages"][0]["code"] == "WHEELS_OVERLAP"
        assert data["validation"]["messages"][0]["severity"] == "warning"

    def test_with_chain(self, default_geometry):
        """Chain path is included when given."""
        chain = calculate_chain_path(default_geometry)
        data = json.loads(to_json(default_geometry, chain=chain))
        assert len(data["chain_path"]) == len(chain)
        first = data["chain_path"][0]
        assert set(first) == {"position", "angle", "kind"}
        assert first["kind"] == "half"

    def test_indent(self, example_geometry):
        """indent=None gives compact JSON."""
        assert "\n" not in to_json(example_geometry, indent=None)


class TestToMarkdown:
    """Tests for the markdown report."""

    def test_sections(self, default_geometry):
        """Report has every section and the footer."""
        md = to_markdown(default_geometry)
        assert md.startswith("# Bicycle Frame Geometry")
        for heading in ("## Frame", "## Wheels", "## Drivetrain", "## Leveling", "## Key Points", "## Notes"):
            assert heading in md
        assert "## Validation" not in md
        assert md.rstrip().endswith("*Generated by Bikeframe Calculator*")

    def test_key_points_listed(self, default_geometry):
        """Key points are listed in the table."""
        md = to_markdown(default_geometry)
        assert "| B_start |" in md
        assert "| barH |" in md

    def test_modes_and_drive_side(self, default_geometry):
        """Fork mode and drive side are reported."""
        md = to_markdown(default_geometry)
        assert "| Fork Mode | constrained |" in md
        assert "| Drive Side | right |" in md

    def test_validation_section(self, example_geometry):
        """Validation status and warnings are reported when given."""
        validation = validate_parameters(example_geometry.params)
        md = to_markdown(example_geometry, validation)
        assert "## Validation" in md
        assert "✓ Valid" in md
        assert "### Warnings" in md
        assert "WHEELS_OVERLAP" in md


class TestToSummary:
    """Tests for the text summary."""

    def test_summary(self, default_geometry):
        """Summary has the title, wheelbase and gear ratio."""
        summary = to_summary(default_geometry)
        lines = summary.splitlines()
        assert lines[0] == "═══ Bicycle Frame Geometry ═══"
        assert any(line.startswith("Wheelbase:") for line in lines)
        assert "25/9" in summary
