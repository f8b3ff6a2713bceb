"""
Stem and handlebar points.

Both are built in a local frame at the origin (stem stack along +Y, bar
width along +Z), rotated to line up with the head tube, then translated to
their attachment point. The head tube direction comes from the leveled
skeleton, so both solvers require a LeveledSkeleton.
"""

from dataclasses import dataclass
from math import atan2, pi, radians
from typing import Dict

from ..io.loaders import FrameParameters, HandlebarRotations
from ..vectors import Vec3, rotate_x, rotate_y, rotate_z
from .constants import (
    HANDLEBAR_MIN_WIDTH,
    HANDLEBAR_CORNER_FRACTION,
    HANDLEBAR_CROSSBAR_FRACTION,
)
from .stages import LeveledSkeleton


@dataclass(frozen=True)
class HandlebarPoints:
    points: Dict[str, Vec3]
    rotations: HandlebarRotations


def stem_vector(leveled: LeveledSkeleton) -> Vec3:
    """Unit vector down the head tube, from P_end towards F_end."""
    return (leveled.points["F_end"] - leveled.points["P_end"]).normalized()


def stem_alignment_angle(direction: Vec3) -> float:
    """Z rotation taking local +Y onto the head tube axis (pointing up)."""
    return atan2(direction.y, direction.x) + pi / 2


def calculate_stem_points(params: FrameParameters, leveled: LeveledSkeleton) -> Dict[str, Vec3]:
    """
    Headset and stem points, attached at the head tube top (P_end).

    Returns headset_Start, headset_End, spacer_end, stem_center, L_end
    (end of the stem reach) and R_end (top of the stem rise, where the
    handlebar clamps).
    """
    headset_start = Vec3(0.0, 0.0, 0.0)
    headset_end = Vec3(0.0, params.HS_BaseHeight, 0.0)
    spacer_end = headset_end + Vec3(0.0, params.HS_SpacerCount * params.HS_SpacerWidth, 0.0)
    stem_center = spacer_end + Vec3(0.0, params.HS_StemCenter, 0.0)
    l_end = stem_center + Vec3(-params.L_length, 0.0, 0.0)
    r_end = l_end + Vec3(0.0, params.R_length, 0.0)

    local = {
        "headset_Start": headset_start,
        "headset_End": headset_end,
        "spacer_end": spacer_end,
        "stem_center": stem_center,
        "L_end": l_end,
        "R_end": r_end,
    }

    angle = stem_alignment_angle(stem_vector(leveled))
    attach = leveled.points["P_end"]
    # headset_Start is the local origin, so it lands exactly on the attach point
    return {name: rotate_z(p, angle) + attach for name, p in local.items()}


def calculate_handlebar_points(
    params: FrameParameters,
    leveled: LeveledSkeleton,
    attach: Vec3,
) -> HandlebarPoints:
    """
    Handlebar points, clamped at the stem's R_end.

    Local layout: barC at the clamp, barH straight up by B_height, Bw_end
    out along +Z by B_width, Bg_end back towards the centre by the grip
    width. The grip segment (Bg_end -> Bw_end) gets backsweep (about Y) then
    upsweep (about X). B_corner marks the bend and crossbar_pos the
    crossbar end.

    Returns:
        HandlebarPoints with barC, barH, Bw_end, Bg_end, B_corner,
        crossbar_pos, barH_crossbar and the applied rotations
    """
    bar_c = Vec3(0.0, 0.0, 0.0)
    bar_h = Vec3(0.0, params.B_height, 0.0)

    up = (bar_h - bar_c).normalized()
    sideways = Vec3(up.z, -up.x, up.y)
    bw_end = bar_h + sideways * params.B_width

    grip_direction = (bar_h - bw_end).normalized()
    if params.B_width <= HANDLEBAR_MIN_WIDTH:
        grip_width = 0.0
    else:
        grip_width = min(params.Bg_width, bw_end.z)
    bg_end = bw_end + grip_direction * grip_width

    grip = rotate_x(rotate_y(bw_end - bg_end, radians(params.backsweep)), -radians(params.upsweep))
    bw_end = bg_end + grip

    b_corner = Vec3(0.0, bar_c.y, bar_c.z + (bg_end.z - bar_c.z) * HANDLEBAR_CORNER_FRACTION)
    crossbar_pos = b_corner + (bg_end - b_corner) * HANDLEBAR_CROSSBAR_FRACTION
    bar_h_crossbar = Vec3(0.0, crossbar_pos.y, 0.0)

    local = {
        "barC": bar_c,
        "barH": bar_h,
        "Bw_end": bw_end,
        "Bg_end": bg_end,
        "B_corner": b_corner,
        "crossbar_pos": crossbar_pos,
        "barH_crossbar": bar_h_crossbar,
    }

    user_rotation = radians(params.B_rotation)
    alignment = stem_alignment_angle(stem_vector(leveled))
    points = {
        name: rotate_z(rotate_z(p, user_rotation), alignment) + attach
        for name, p in local.items()
    }

    return HandlebarPoints(
        points=points,
        rotations=HandlebarRotations(
            user_rotation=user_rotation,
            stem_alignment=alignment,
            total_local=user_rotation + alignment,
        ),
    )
