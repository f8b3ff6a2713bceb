"""
Bicycle Frame Calculator - Core Calculation

Runs the full solver pipeline and assembles the immutable geometry record:

    primary skeleton -> axles -> drivetrain (stance, RHD) -> gear tangents
    -> wheelbase leveling -> wheel tangent leveling
    -> fork, chainstays, stem, handlebar -> frame members, spoke patterns

Each stage returns a new snapshot; nothing is mutated in place. The result
is a pure function of the parameters.
"""

import logging
from math import isfinite
from typing import Any, Dict, Mapping, Union

from ..errors import InvalidConfigurationError
from ..io.loaders import BikeGeometry, FrameParameters, Rotations, parse_parameters
from ..vectors import Vec3
from .attachments import calculate_chainstay_bottom, calculate_chainstay_top, calculate_fork_points
from .cockpit import calculate_handlebar_points, calculate_stem_points
from .drivetrain import calculate_drivetrain, calculate_gear_system
from .leveling import level_wheelbase, level_wheel_tangent
from .skeleton import calculate_axle_points, calculate_primary_skeleton, resolve_frame_members
from .spokes import calculate_spoke_patterns
from .validation import validate_parameters

logger = logging.getLogger(__name__)

ParameterInput = Union[FrameParameters, Mapping[str, Any]]


def calculate_geometry(params: ParameterInput) -> BikeGeometry:
    """
    Solve the complete bicycle geometry.

    Args:
        params: FrameParameters, or a flat/grouped mapping of parameter
            values (cm, degrees)

    Returns:
        BikeGeometry with points, sizes, rotations, frame members, spoke
        patterns and handlebar rotations

    Raises:
        MissingParameterError: If required parameters are absent
        InvalidConfigurationError: If the parameters describe an impossible
            frame, or the result would contain non-finite coordinates
    """
    params = parse_parameters(params)

    validation = validate_parameters(params)
    for message in validation.warnings:
        logger.warning(f"{message.code}: {message.message}")
    if not validation.valid:
        raise InvalidConfigurationError(
            "; ".join(m.message for m in validation.errors),
            validation.error_fields,
        )

    primary = calculate_primary_skeleton(params)
    axles = calculate_axle_points(params, primary)
    drivetrain = calculate_drivetrain(params, axles)
    geared = calculate_gear_system(params, drivetrain)
    leveled = level_wheel_tangent(level_wheelbase(geared))

    points: Dict[str, Vec3] = dict(leveled.points)
    points.update(calculate_fork_points(params, leveled))
    points.update(calculate_chainstay_bottom(params, leveled))
    points.update(calculate_chainstay_top(params, leveled))

    stem = calculate_stem_points(params, leveled)
    points.update(stem)
    handlebar = calculate_handlebar_points(params, leveled, stem["R_end"])
    points.update(handlebar.points)

    sizes = dict(leveled.sizes)
    sizes["R1_size"] = params.R1_size
    sizes["R2_size"] = params.R2_size

    rotations = Rotations(
        wheelbase=leveled.wheelbase_rotation,
        wheel_tangent=leveled.wheel_tangent_rotation,
        total=leveled.total_rotation,
    )

    _ensure_finite(points, sizes)

    logger.debug(
        f"Geometry solved: {len(points)} points, bbHeight={sizes['bbHeight']:.3f}, "
        f"total rotation={rotations.total:.6f} rad"
    )

    return BikeGeometry(
        points=points,
        sizes=sizes,
        rotations=rotations,
        frame_members=resolve_frame_members(points),
        spoke_patterns=calculate_spoke_patterns(params),
        handlebar_rotations=handlebar.rotations,
        params=params,
    )


def _ensure_finite(points: Mapping[str, Vec3], sizes: Mapping[str, float]) -> None:
    """Reject any NaN/infinite output that slipped past validation."""
    bad = [name for name, p in points.items() if not p.is_finite()]
    bad.extend(name for name, value in sizes.items() if not isfinite(value))
    if bad:
        raise InvalidConfigurationError(
            f"Geometry contains non-finite values: {', '.join(sorted(bad))}"
        )
