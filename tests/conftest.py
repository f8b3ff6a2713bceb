"""
Pytest configuration and shared fixtures for bikeframe tests.
"""

import pytest


# ─── Raw parameter dicts ─────────────────────────────────────────────────


@pytest.fixture
def example_params():
    """Small test frame with equal 14.1 cm wheels (fresh dict per test)."""
    return _example_params()


@pytest.fixture
def default_params():
    """Editor default bike (fresh dict per test)."""
    return _default_params()


@pytest.fixture
def grouped_params():
    """Example frame in the editor's grouped folder layout."""
    return _grouped_params()


# ─── Module-scoped solved geometry ───────────────────────────────────────


@pytest.fixture(scope="module")
def example_geometry():
    """Module-scoped geometry of the example frame."""
    from bikeframe.calculator import calculate_geometry
    return calculate_geometry(_example_params())


@pytest.fixture(scope="module")
def default_geometry():
    """Module-scoped geometry of the default bike."""
    from bikeframe.calculator import calculate_geometry
    return calculate_geometry(_default_params())


@pytest.fixture(scope="module")
def uneven_geometry():
    """Module-scoped default bike with a smaller front wheel."""
    from bikeframe.calculator import calculate_geometry
    params = _default_params()
    params["R1_size"] = 15.0
    return calculate_geometry(params)


@pytest.fixture
def temp_params_file(tmp_path):
    """Example parameters written to a flat JSON file."""
    import json
    path = tmp_path / "frame.json"
    path.write_text(json.dumps(_example_params()))
    return path


# ─── Helper functions (no pytest dependency) ──────────────────────────────


def _example_params():
    """Return the raw example frame dict."""
    return {
        "B_length": 20.0,
        "A_length": 22.0,
        "B_angle": 70.0,
        "B_drop": 2.0,
        "D_angle": 50.0,
        "F_length": 3.0,
        "H_length": 8.0,
        "S_length": 17.0,
        "T_length": 0.0,
        "R1_size": 13.0,
        "T1_size": 1.1,
        "R2_size": 13.0,
        "T2_size": 1.1,
        "F_mode": False,
        "S_mode": False,
    }


def _default_params():
    from bikeframe.calculator import get_preset
    return get_preset("default")


def _grouped_params():
    flat = _example_params()
    return {
        "schema_version": "1.0",
        "frameGeometry": {
            name: {"value": flat[name], "unit": "cm"}
            for name in ("A_length", "B_length", "B_angle", "B_drop", "H_length", "D_angle")
        },
        "fork": {"T_length": flat["T_length"], "F_length": flat["F_length"], "F_mode": False},
        "chainstay": {"S_length": flat["S_length"], "S_mode": False},
        "wheels": {
            "R1_size": flat["R1_size"],
            "T1_size": flat["T1_size"],
            "R2_size": flat["R2_size"],
            "T2_size": flat["T2_size"],
        },
    }
