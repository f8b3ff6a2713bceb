"""
Drivetrain points: bottom-bracket stacks, cranks, driver and chain line.

The drive side stacks outward along +Z from the bottom bracket: headset
cover, spacers, sprocket, crank. The non-drive side mirrors it along -Z
without a sprocket. The driver (rear cog) sits on the rear axle.

Stance and right-hand-drive are applied as pure transforms; each is its own
inverse.
"""

import logging
from math import pi
from typing import Dict, Mapping

from ..enums import DriveSide
from ..io.loaders import FrameParameters
from ..vectors import Vec3
from .stages import AxleSkeleton, DrivetrainSkeleton, GearedSkeleton
from .tangent import external_tangent

logger = logging.getLogger(__name__)

DRIVE_SIDE_POINTS = (
    "BB_headsetStart", "BB_headsetEnd", "BB_SpacerEnd",
    "Spkt_Center", "Crnk_Center", "Crnk_End",
)
NON_DRIVE_SIDE_POINTS = (
    "BB_headsetStart_NonD", "BB_headsetEnd_NonD", "BB_SpacerEnd_NonD",
    "Crnk_Center_NonD", "Crnk_End_NonD",
)
DRIVER_POINTS = ("Drv_Center",)
CRANK_END_POINTS = ("Crnk_End", "Crnk_End_NonD")

MIRRORED_POINTS = DRIVE_SIDE_POINTS + NON_DRIVE_SIDE_POINTS + DRIVER_POINTS


def calculate_drive_side(params: FrameParameters, attach: Vec3) -> Dict[str, Vec3]:
    """Drive-side stack, translated to the bottom-bracket axle point."""
    headset_end_z = params.BB_BaseHeight
    spacer_end_z = headset_end_z + params.BB_SpacerWidth * params.BB_SpacerCount
    sprocket_z = spacer_end_z + params.SpktAttachDistance
    crank_center_z = sprocket_z + params.CrankAttachDistance

    local = {
        "BB_headsetStart": Vec3(0.0, 0.0, 0.0),
        "BB_headsetEnd": Vec3(0.0, 0.0, headset_end_z),
        "BB_SpacerEnd": Vec3(0.0, 0.0, spacer_end_z),
        "Spkt_Center": Vec3(0.0, 0.0, sprocket_z),
        "Crnk_Center": Vec3(0.0, 0.0, crank_center_z),
        "Crnk_End": Vec3(-params.CrankLength, 0.0, crank_center_z + params.CrankOffset),
    }
    return {name: p + attach for name, p in local.items()}


def calculate_non_drive_side(params: FrameParameters, attach: Vec3) -> Dict[str, Vec3]:
    """Non-drive stack along -Z, translated to (attach.x, attach.y, -attach.z)."""
    headset_end_z = -params.BB_BaseHeight_NonD
    spacer_end_z = headset_end_z - params.BB_SpacerWidth_NonD * params.BB_SpacerCount_NonD
    crank_center_z = spacer_end_z - params.CrankAttachDistance_NonD

    local = {
        "BB_headsetStart_NonD": Vec3(0.0, 0.0, 0.0),
        "BB_headsetEnd_NonD": Vec3(0.0, 0.0, headset_end_z),
        "BB_SpacerEnd_NonD": Vec3(0.0, 0.0, spacer_end_z),
        "Crnk_Center_NonD": Vec3(0.0, 0.0, crank_center_z),
        "Crnk_End_NonD": Vec3(params.CrankLength, 0.0, crank_center_z - params.CrankOffset),
    }
    offset = Vec3(attach.x, attach.y, -attach.z)
    return {name: p + offset for name, p in local.items()}


def drive_side(params: FrameParameters) -> DriveSide:
    """Side carrying the sprocket and chain."""
    return DriveSide.LEFT if params.isRHD else DriveSide.RIGHT


def is_left_foot_forward(params: FrameParameters) -> bool:
    """
    Effective stance after accounting for drive side.

    With right-hand drive the stored preference is inverted.
    """
    if params.isRHD:
        return not params.leftFootForward
    return params.leftFootForward


def apply_stance_rotation(points: Mapping[str, Vec3], pivot: Vec3) -> Dict[str, Vec3]:
    """
    Rotate both crank ends by pi about Z around ``pivot``.

    Implemented as a point reflection in XY, which is exactly a half turn
    and keeps z.
    """
    result = dict(points)
    for name in CRANK_END_POINTS:
        p = result[name]
        result[name] = Vec3(2.0 * pivot.x - p.x, 2.0 * pivot.y - p.y, p.z)
    return result


def mirror_drivetrain(points: Mapping[str, Vec3]) -> Dict[str, Vec3]:
    """Negate z of every drivetrain point (right-hand drive)."""
    result = dict(points)
    for name in MIRRORED_POINTS:
        p = result[name]
        result[name] = p.with_z(-p.z)
    return result


def calculate_drivetrain(params: FrameParameters, axles: AxleSkeleton) -> DrivetrainSkeleton:
    """
    Add both bottom-bracket stacks and the driver centre.

    Stance rotation and RHD mirroring are applied here so later stages see
    the final drivetrain layout.
    """
    points = dict(axles.points)
    mid_axel = points["midAxel"]

    points.update(calculate_drive_side(params, mid_axel))
    points.update(calculate_non_drive_side(params, mid_axel))
    points["Drv_Center"] = points["rearAxel"] + Vec3(0.0, 0.0, params.DrvAttachDistance)

    if not is_left_foot_forward(params):
        points = apply_stance_rotation(points, points["B_start"])

    if drive_side(params) == DriveSide.LEFT:
        points = mirror_drivetrain(points)

    logger.debug(
        f"Drivetrain: sprocket z={points['Spkt_Center'].z:.3f} "
        f"driver z={points['Drv_Center'].z:.3f} rhd={params.isRHD}"
    )
    return DrivetrainSkeleton(points=points, sizes=axles.sizes)


def gear_radius(chain_pitch: float, teeth: int) -> float:
    """Pitch radius used for a gear: pitch * teeth / 2pi."""
    return chain_pitch * teeth / (2 * pi)


def calculate_gear_system(params: FrameParameters, drivetrain: DrivetrainSkeleton) -> GearedSkeleton:
    """
    Compute gear sizes and the chain-line tangent points.

    The sprocket circle is centred on B_start (radius D2_size), the driver on
    S_end (radius D1_size), both in the frame plane. S1/D1 form one chain
    run, S2/D2 the other.

    Raises:
        InvalidConfigurationError: If the sprocket and driver circles have no
            external tangent
    """
    points = dict(drivetrain.points)
    sprocket_size = gear_radius(params.D_width, params.D2_count)
    driver_size = gear_radius(params.D_width, params.D1_count)

    tangents = external_tangent(
        points["S_end"], driver_size,
        points["B_start"], sprocket_size,
        fields=("D_width", "D1_count", "D2_count", "S_length", "B_drop"),
    )

    sprocket_z = points["Spkt_Center"].z
    driver_z = points["Drv_Center"].z
    points["tangentPointS1"] = tangents.lower_b.with_z(sprocket_z)
    points["tangentPointD1"] = tangents.lower_a.with_z(driver_z)
    points["tangentPointS2"] = tangents.upper_b.with_z(sprocket_z)
    points["tangentPointD2"] = tangents.upper_a.with_z(driver_z)

    sizes = dict(drivetrain.sizes)
    sizes["D1_size"] = driver_size
    sizes["D2_size"] = sprocket_size
    return GearedSkeleton(points=points, sizes=sizes)
