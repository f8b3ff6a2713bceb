"""
Bikeframe - parametric bicycle frame geometry calculator.

Solves the 3D position of every frame, drivetrain, cockpit and wheel point
from a set of named parameters, levels the bike onto the ground line, and
hands renderers one immutable geometry record.

Example:
    >>> from bikeframe import calculate_geometry, get_preset, save_geometry_json
    >>>
    >>> geometry = calculate_geometry(get_preset("default"))
    >>> save_geometry_json(geometry, "geometry.json")

Note: All imports are lazy-loaded for fast startup.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"WheelPosition", "SpokeColor", "DriveSide", "ChainLinkKind"}

_ERRORS = {"GeometryError", "MissingParameterError", "InvalidConfigurationError"}

_VECTORS = {"Vec3"}

_CALCULATOR = {
    "calculate_geometry",
    "calculate_chain_path",
    "place_spokes",
    "sprocket_teeth",
    "driver_teeth",
    "stance_rotation",
    "validate_parameters",
    "Severity",
    "ValidationResult",
    "get_preset",
    "DEFAULT_PARAMETERS",
    "FRAME_MEMBERS",
}

_IO = {
    "load_parameters_json",
    "save_parameters_json",
    "save_geometry_json",
    "parse_parameters",
    "FrameParameters",
    "BikeGeometry",
    "FrameMember",
    "SpokePattern",
    "SpokePatterns",
    "Rotations",
}

_GROUPS = (
    (_ENUMS, "enums"),
    (_ERRORS, "errors"),
    (_VECTORS, "vectors"),
    (_CALCULATOR, "calculator"),
    (_IO, "io"),
)

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    for names, module_name in _GROUPS:
        if name in names:
            if module_name not in _modules:
                import importlib
                _modules[module_name] = importlib.import_module(f".{module_name}", __name__)
            return getattr(_modules[module_name], name)

    raise AttributeError(f"module 'bikeframe' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "WheelPosition",
    "SpokeColor",
    "DriveSide",
    "ChainLinkKind",

    # Errors
    "GeometryError",
    "MissingParameterError",
    "InvalidConfigurationError",

    # Vectors
    "Vec3",

    # Calculator (lazy loaded from calculator)
    "calculate_geometry",
    "calculate_chain_path",
    "place_spokes",
    "sprocket_teeth",
    "driver_teeth",
    "stance_rotation",
    "validate_parameters",
    "Severity",
    "ValidationResult",
    "get_preset",
    "DEFAULT_PARAMETERS",
    "FRAME_MEMBERS",

    # IO (lazy loaded from io)
    "load_parameters_json",
    "save_parameters_json",
    "save_geometry_json",
    "parse_parameters",
    "FrameParameters",
    "BikeGeometry",
    "FrameMember",
    "SpokePattern",
    "SpokePatterns",
    "Rotations",
]
