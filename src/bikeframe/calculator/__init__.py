"""
Bicycle Frame Calculator - parametric geometry solver.

Computes every structural and mechanical point of a bicycle from named
parameters and returns one immutable BikeGeometry record.

Example:
    >>> from bikeframe.calculator import calculate_geometry, get_preset
    >>>
    >>> geometry = calculate_geometry(get_preset("default"))
    >>> geometry.points["B_start"].y  # bottom bracket height
    >>> geometry.rotations.total      # rotate wheel hardware by this
"""

from .core import calculate_geometry

from .skeleton import (
    calculate_primary_skeleton,
    calculate_axle_points,
    resolve_frame_members,
    effective_fork_length,
    effective_stay_length,
)

from .drivetrain import (
    calculate_drivetrain,
    calculate_gear_system,
    calculate_drive_side,
    calculate_non_drive_side,
    apply_stance_rotation,
    mirror_drivetrain,
    is_left_foot_forward,
    drive_side,
    gear_radius,
)

from .tangent import external_tangent, ExternalTangents

from .leveling import level_wheelbase, level_wheel_tangent, level_skeleton

from .attachments import (
    calculate_fork_points,
    calculate_chainstay_bottom,
    calculate_chainstay_top,
)

from .cockpit import calculate_stem_points, calculate_handlebar_points, HandlebarPoints

from .spokes import calculate_spoke_pattern, calculate_spoke_patterns

from .chain import calculate_chain_path, ChainLink

from .placement import (
    place_spokes,
    place_wheel_point,
    sprocket_teeth,
    driver_teeth,
    stance_rotation,
    ToothPlacement,
)

from .stages import (
    PrimarySkeleton,
    AxleSkeleton,
    DrivetrainSkeleton,
    GearedSkeleton,
    WheelbaseLeveledSkeleton,
    LeveledSkeleton,
)

from .validation import (
    validate_parameters,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from .constants import FRAME_MEMBERS, DEFAULT_PARAMETERS, get_preset

from .output import to_json, to_markdown, to_summary

__all__ = [
    # Orchestration
    "calculate_geometry",

    # Stage solvers
    "calculate_primary_skeleton",
    "calculate_axle_points",
    "resolve_frame_members",
    "effective_fork_length",
    "effective_stay_length",
    "calculate_drivetrain",
    "calculate_gear_system",
    "calculate_drive_side",
    "calculate_non_drive_side",
    "apply_stance_rotation",
    "mirror_drivetrain",
    "is_left_foot_forward",
    "drive_side",
    "gear_radius",
    "external_tangent",
    "ExternalTangents",
    "level_wheelbase",
    "level_wheel_tangent",
    "level_skeleton",
    "calculate_fork_points",
    "calculate_chainstay_bottom",
    "calculate_chainstay_top",
    "calculate_stem_points",
    "calculate_handlebar_points",
    "HandlebarPoints",
    "calculate_spoke_pattern",
    "calculate_spoke_patterns",

    # Hardware placement
    "calculate_chain_path",
    "ChainLink",
    "place_spokes",
    "place_wheel_point",
    "sprocket_teeth",
    "driver_teeth",
    "stance_rotation",
    "ToothPlacement",

    # Stage snapshots
    "PrimarySkeleton",
    "AxleSkeleton",
    "DrivetrainSkeleton",
    "GearedSkeleton",
    "WheelbaseLeveledSkeleton",
    "LeveledSkeleton",

    # Validation
    "validate_parameters",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Constants and presets
    "FRAME_MEMBERS",
    "DEFAULT_PARAMETERS",
    "get_preset",

    # Output
    "to_json",
    "to_markdown",
    "to_summary",
]
