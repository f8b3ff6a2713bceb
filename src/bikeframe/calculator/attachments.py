"""
Fork and chainstay detail points.

These are placed on the leveled skeleton and offset along z towards the hub
ends, so they only accept a LeveledSkeleton.
"""

from math import radians
from typing import Dict

from ..io.loaders import FrameParameters
from ..vectors import Vec3, rotate_about_x
from .stages import LeveledSkeleton


def calculate_fork_points(params: FrameParameters, leveled: LeveledSkeleton) -> Dict[str, Vec3]:
    """
    Fork blade points from the crown (F_end) down to the dropout (D_end).

    Returns moveD_end, forkElbow, F_end_fork and forkBase. Everything below
    the crown is pushed out to the front hub half-width.
    """
    f_end = leveled.points["F_end"]
    d_end = leveled.points["D_end"]
    hub_z = leveled.points["frontAxel"].z
    direction = (d_end - f_end).normalized()

    move_d_end = f_end + direction * params.moveD_end
    fork_elbow = (move_d_end + direction * params.forkElbowPosition).offset_z(
        hub_z + params.forkElbow_offset
    )

    return {
        "moveD_end": move_d_end,
        "forkElbow": fork_elbow,
        "F_end_fork": d_end.offset_z(hub_z),
        "forkBase": (d_end + direction * params.forkBase_distance).offset_z(hub_z),
    }


def _chainstay_points(
    start: Vec3,
    rear_axle: Vec3,
    start_offset: float,
    neck_position: float,
    neck_offset: float,
    elbow_position: float,
    elbow_offset: float,
    end_inset: float,
    end_offset: float,
):
    direction = (rear_axle.with_z(0.0) - start.with_z(0.0)).normalized()

    start_offset_point = start.offset_z(start_offset)
    neck = (start_offset_point + direction * neck_position).offset_z(neck_offset)
    elbow = (start + direction * elbow_position).offset_z(rear_axle.z + elbow_offset)
    stay_end = (rear_axle + (elbow - rear_axle).normalized() * end_inset).offset_z(end_offset)
    return start_offset_point, neck, elbow, stay_end


def calculate_chainstay_bottom(params: FrameParameters, leveled: LeveledSkeleton) -> Dict[str, Vec3]:
    """
    Lower stay from the bottom bracket (B_start) to the rear axle.

    The neck, elbow and stay end are pitched about the X axis through
    B_start by chainstayPitchOffset degrees.
    """
    b_start = leveled.points["B_start"]
    rear_axle = leveled.points["S_end"].with_z(leveled.points["rearAxel"].z)

    start_offset, neck, elbow, stay_end = _chainstay_points(
        b_start,
        rear_axle,
        params.B_startOffset,
        params.chainstayNeckPos,
        params.chainstayNeckOffset,
        params.chainstayElbowPosition,
        params.chainstayElbow_offset,
        params.chainstayEndInset,
        params.chainstayEndOffset,
    )

    if params.chainstayPitchOffset != 0:
        pitch = radians(params.chainstayPitchOffset)
        neck = rotate_about_x(b_start, neck, pitch)
        elbow = rotate_about_x(b_start, elbow, pitch)
        stay_end = rotate_about_x(b_start, stay_end, pitch)

    return {
        "B_startOffset": start_offset,
        "chainstayNeck": neck,
        "chainstayElbow": elbow,
        "S_end_stay": stay_end,
    }


def calculate_chainstay_top(params: FrameParameters, leveled: LeveledSkeleton) -> Dict[str, Vec3]:
    """Upper (seat) stay from the seat tube top (B_end) to the rear axle."""
    b_end = leveled.points["B_end"]
    rear_axle = leveled.points["S_end"].with_z(leveled.points["rearAxel"].z)

    start_offset, neck, elbow, stay_end = _chainstay_points(
        b_end,
        rear_axle,
        params.B_startOffset_T,
        params.chainstayNeckPos_T,
        params.chainstayNeckOffset_T,
        params.chainstayElbowPosition_T,
        params.chainstayElbow_offset_T,
        params.chainstayEndInset_T,
        params.chainstayEndOffset_T,
    )
    return {
        "B_startOffset_T": start_offset,
        "chainstayNeck_T": neck,
        "chainstayElbow_T": elbow,
        "S_end_stay_T": stay_end,
    }
