"""
Bikeframe IO - parameter and geometry models, JSON loaders and exporters.

Example:
    >>> from bikeframe.io import load_parameters_json, save_geometry_json
    >>> from bikeframe.calculator import calculate_geometry
    >>>
    >>> params = load_parameters_json("bike.json")
    >>> geometry = calculate_geometry(params)
    >>> save_geometry_json(geometry, "geometry.json")
"""

from .loaders import (
    parse_parameters,
    read_parameters_json,
    load_parameters_json,
    save_parameters_json,
    save_geometry_json,
    FrameParameters,
    BikeGeometry,
    FrameMember,
    Spoke,
    SpokeRings,
    SpokeSet,
    SpokePattern,
    SpokePatterns,
    Rotations,
    HandlebarRotations,
)

from .schema import (
    SCHEMA_VERSION,
    PARAMETER_GROUPS,
    REQUIRED_PARAMETERS,
    flatten_parameter_groups,
    validate_json_schema,
)

__all__ = [
    # Loaders
    "parse_parameters",
    "read_parameters_json",
    "load_parameters_json",
    "save_parameters_json",
    "save_geometry_json",

    # Models
    "FrameParameters",
    "BikeGeometry",
    "FrameMember",
    "Spoke",
    "SpokeRings",
    "SpokeSet",
    "SpokePattern",
    "SpokePatterns",
    "Rotations",
    "HandlebarRotations",

    # Schema
    "SCHEMA_VERSION",
    "PARAMETER_GROUPS",
    "REQUIRED_PARAMETERS",
    "flatten_parameter_groups",
    "validate_json_schema",
]
