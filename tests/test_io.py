"""
Tests for the IO module - JSON loading, parameter parsing and schema checks.
"""

import json

import pytest
from pydantic import ValidationError

from bikeframe import (
    BikeGeometry,
    FrameParameters,
    load_parameters_json,
    parse_parameters,
    save_geometry_json,
    save_parameters_json,
)
from bikeframe.errors import InvalidConfigurationError, MissingParameterError
from bikeframe.io import (
    REQUIRED_PARAMETERS,
    SCHEMA_VERSION,
    flatten_parameter_groups,
    read_parameters_json,
    validate_json_schema,
)
from bikeframe.io.schema import KNOWN_PARAMETERS


class TestParseParameters:
    """Tests for parse_parameters."""

    def test_flat(self, example_params):
        """Flat mappings parse into FrameParameters."""
        params = parse_parameters(example_params)
        assert isinstance(params, FrameParameters)
        assert params.A_length == 22.0
        assert params.F_mode is False

    def test_defaults_filled(self, example_params):
        """Optional parameters take the editor defaults."""
        params = parse_parameters(example_params)
        assert params.D2_count == 25
        assert params.D1_count == 9
        assert params.CrankLength == 17.0
        assert params.leftFootForward is True
        assert params.isRHD is False

    def test_grouped(self, grouped_params, example_params):
        """Grouped and flat layouts give the same parameters."""
        assert parse_parameters(grouped_params) == parse_parameters(example_params)

    def test_passthrough(self, example_params):
        """An existing FrameParameters is returned unchanged."""
        params = parse_parameters(example_params)
        assert parse_parameters(params) is params

    def test_unknown_keys_ignored(self, example_params):
        """Unknown keys are ignored."""
        example_params["colour"] = "red"
        assert parse_parameters(example_params).A_length == 22.0

    def test_missing_lists_all_fields(self):
        """Every absent required field is reported at once."""
        with pytest.raises(MissingParameterError) as exc_info:
            parse_parameters({})
        assert set(exc_info.value.fields) == set(REQUIRED_PARAMETERS)
        assert "Missing required parameter(s)" in str(exc_info.value)

    def test_malformed_value(self, example_params):
        """A non-numeric value is reported against its field."""
        example_params["B_angle"] = "steep"
        with pytest.raises(InvalidConfigurationError) as exc_info:
            parse_parameters(example_params)
        assert exc_info.value.fields == ("B_angle",)

    def test_errors_are_value_errors(self):
        """Parse errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_parameters({})

    def test_frozen(self, example_params):
        """Parsed parameters cannot be reassigned."""
        params = parse_parameters(example_params)
        with pytest.raises(ValidationError):
            params.A_length = 1.0

    def test_model_covers_known_parameters(self):
        """Model fields match the editor's parameter groups."""
        assert set(FrameParameters.model_fields) == set(KNOWN_PARAMETERS)


class TestFlattenGroups:
    """Tests for flattening the grouped layout."""

    def test_values_unwrapped(self, grouped_params):
        """Editor metadata is reduced to the plain value."""
        flat = flatten_parameter_groups(grouped_params)
        assert flat["A_length"] == 22.0
        assert flat["S_length"] == 17.0

    def test_flat_key_wins(self):
        """A flat key overrides the same key inside a group."""
        flat = flatten_parameter_groups({"fork": {"F_length": 3.0}, "F_length": 4.0})
        assert flat["F_length"] == 4.0


class TestLoadParametersJson:
    """Tests for loading and saving parameter files."""

    def test_load_flat_file(self, temp_params_file):
        """Load a flat parameter file."""
        params = load_parameters_json(temp_params_file)
        assert params.S_length == 17.0

    def test_load_grouped_file(self, tmp_path, grouped_params):
        """Load a grouped parameter file."""
        path = tmp_path / "grouped.json"
        path.write_text(json.dumps(grouped_params))
        assert load_parameters_json(path).B_angle == 70.0

    def test_load_wrapped_file(self, tmp_path, example_params):
        """Load a file that wraps parameters under 'params'."""
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"params": example_params}))
        assert load_parameters_json(path).H_length == 8.0

    def test_missing_file(self, tmp_path):
        """Missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_parameters_json(tmp_path / "nope.json")

    def test_not_an_object(self, tmp_path):
        """A top-level JSON array is rejected."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError):
            load_parameters_json(path)

    def test_read_partial_file(self, tmp_path):
        """read_parameters_json flattens without requiring every field."""
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"chainstay": {"S_length": 40.0}}))
        assert read_parameters_json(path) == {"S_length": 40.0}

    def test_save_and_reload(self, tmp_path, example_params):
        """Saved parameters carry a schema version and reload equal."""
        params = parse_parameters(example_params)
        path = tmp_path / "saved.json"
        save_parameters_json(params, path)

        data = json.loads(path.read_text())
        assert data["schema_version"] == SCHEMA_VERSION
        assert load_parameters_json(path) == params


class TestSaveGeometryJson:
    """Tests for saving solved geometry."""

    def test_save_geometry(self, tmp_path, example_geometry):
        """Saved geometry uses the renderer's camelCase keys."""
        path = tmp_path / "geometry.json"
        save_geometry_json(example_geometry, path)

        data = json.loads(path.read_text())
        assert data["schema_version"] == SCHEMA_VERSION
        assert set(data["points"]["B_start"]) == {"x", "y", "z"}
        assert data["rotations"]["total"] == example_geometry.rotations.total
        assert len(data["spokePatterns"]["front"]["spokes"]["red"]) == 18
        assert len(data["spokePatterns"]["front"]["points"]["hubPointsRight"]) == 18
        assert data["frameMembers"]["topTube"]["startRef"] == "B_end"

    def test_geometry_round_trip(self, tmp_path, example_geometry):
        """Saved geometry validates back into an equal record."""
        path = tmp_path / "geometry.json"
        save_geometry_json(example_geometry, path)
        reloaded = BikeGeometry.model_validate(json.loads(path.read_text()))
        assert reloaded.points["T_end"] == example_geometry.points["T_end"]
        assert reloaded.rotations == example_geometry.rotations
        assert reloaded.spoke_patterns == example_geometry.spoke_patterns


class TestJsonSchema:
    """Tests for structural checks of parameter files."""

    def test_valid_grouped(self, grouped_params):
        """A complete grouped file is valid."""
        result = validate_json_schema(grouped_params)
        assert result["valid"]
        assert result["errors"] == []
        assert result["schema_version"] == SCHEMA_VERSION

    def test_missing_version_warns(self, example_params):
        """A missing schema_version only warns."""
        result = validate_json_schema(example_params)
        assert result["valid"]
        assert any("schema_version" in w for w in result["warnings"])

    def test_version_mismatch_warns(self, example_params):
        """A different schema_version warns."""
        example_params["schema_version"] = "0.1"
        result = validate_json_schema(example_params)
        assert any("0.1" in w for w in result["warnings"])

    def test_missing_required(self):
        """Missing required parameters are errors."""
        result = validate_json_schema({"schema_version": "1.0", "A_length": 1.0})
        assert not result["valid"]
        assert "Missing required parameter: 'B_length'" in result["errors"]

    def test_unknown_parameter_warns(self, example_params):
        """Unknown parameters are reported as warnings."""
        example_params["wheel_colour"] = "blue"
        result = validate_json_schema(example_params)
        assert any("wheel_colour" in w for w in result["warnings"])

    def test_non_numeric_required(self, example_params):
        """A boolean in a required numeric field is an error."""
        example_params["B_drop"] = True
        result = validate_json_schema(example_params)
        assert not result["valid"]
        assert any("B_drop" in e for e in result["errors"])
