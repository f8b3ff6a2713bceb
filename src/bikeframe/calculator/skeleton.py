"""
Primary frame skeleton and axle reference points.

The frame is solved in the plane z = 0 with the rear axle line on y = 0:

- B: seat tube from the bottom bracket (B_start) up to B_end
- S: chainstay from B_start down to the rear axle S_end
- A: top tube from B_end forward to the head tube top A_end
- D: head tube axis through A_end, meeting y = 0 at D_end
- F: fork from D_end back up the head tube axis to F_end
- T: dropout from D_end to the front axle T_end
- Z: seat post extending the seat tube
- P: head tube extension above A_end

Angles are degrees in FrameParameters and radians here.
"""

import logging
from math import cos, sin, radians, pi
from typing import Dict, Mapping

from ..errors import InvalidConfigurationError
from ..io.loaders import FrameParameters, FrameMember
from ..vectors import Vec3, checked_acos
from .constants import FRAME_MEMBERS, DEGENERATE_EPSILON
from .stages import PrimarySkeleton, AxleSkeleton

logger = logging.getLogger(__name__)


def effective_fork_length(params: FrameParameters) -> float:
    """Fork length, constrained to the front wheel when F_mode is set."""
    if params.F_mode:
        return params.R1_size + params.T1_size + params.F_const
    return params.F_length


def effective_stay_length(params: FrameParameters) -> float:
    """Chainstay length, constrained to the rear wheel when S_mode is set."""
    if params.S_mode:
        return params.R2_size + params.T2_size + params.S_const
    return params.S_length


def fork_length_fields(params: FrameParameters) -> tuple:
    return ("R1_size", "T1_size", "F_const") if params.F_mode else ("F_length",)


def stay_length_fields(params: FrameParameters) -> tuple:
    return ("R2_size", "T2_size", "S_const") if params.S_mode else ("S_length",)


def calculate_primary_skeleton(params: FrameParameters) -> PrimarySkeleton:
    """
    Solve the main frame points.

    Args:
        params: Validated frame parameters

    Returns:
        PrimarySkeleton with points B_start, B_end, S_end, A_end, D_end,
        F_end, T_end, Z_end, P_end and sizes W1_size, W2_size

    Raises:
        InvalidConfigurationError: If the chainstay cannot reach the axle
            line, the top tube cannot reach the head tube, or the head tube
            axis never meets the ground line
    """
    b_angle = radians(params.B_angle)
    d_angle = radians(params.D_angle)

    w1 = params.R1_size + params.T1_size
    w2 = params.R2_size + params.T2_size
    fork_length = effective_fork_length(params)
    stay_length = effective_stay_length(params)

    # Head tube top height along the head tube axis
    a_end_y = (fork_length + params.H_length) * cos(d_angle)

    b_start = Vec3(0.0, params.B_drop, 0.0)
    b_end = Vec3(
        params.B_length * sin(b_angle),
        params.B_length * cos(b_angle) + params.B_drop,
        0.0,
    )

    # Chainstay: drop from the bottom bracket to the axle line
    if stay_length < DEGENERATE_EPSILON:
        raise InvalidConfigurationError(
            "Chainstay length is zero", stay_length_fields(params)
        )
    s_angle = checked_acos(
        b_start.y / stay_length,
        ("B_drop",) + stay_length_fields(params),
        "Chainstay too short for B_drop",
    )
    s_end = Vec3(b_start.x + stay_length * sin(s_angle), 0.0, 0.0)

    # Top tube: from the seat tube top to the head tube height
    if params.A_length < DEGENERATE_EPSILON:
        raise InvalidConfigurationError("Top tube length is zero", ("A_length",))
    a_angle = checked_acos(
        (a_end_y - b_end.y) / params.A_length,
        ("A_length", "B_length", "B_angle", "B_drop", "H_length", "D_angle")
        + fork_length_fields(params),
        "Top tube cannot reach head tube height",
    )
    a_end = Vec3(b_end.x - params.A_length * sin(a_angle), a_end_y, 0.0)

    # Head tube axis meets the ground line
    d_provisional = a_end + Vec3(sin(d_angle), -cos(d_angle), 0.0)
    dy = d_provisional.y - a_end.y
    if abs(dy) < DEGENERATE_EPSILON:
        raise InvalidConfigurationError(
            "Head tube axis is horizontal and never meets the ground line",
            ("D_angle",),
        )
    x_intercept = d_provisional.x - d_provisional.y * (d_provisional.x - a_end.x) / dy
    d_end = Vec3(x_intercept, 0.0, 0.0)

    f_end = Vec3(
        d_end.x - fork_length * sin(d_angle),
        d_end.y + fork_length * cos(d_angle),
        0.0,
    )
    t_end = d_end + Vec3(cos(d_angle + pi), sin(d_angle + pi), 0.0) * params.T_length
    z_end = b_end + (b_end - b_start).normalized() * params.Z_length
    p_end = a_end + (a_end - f_end).normalized() * params.P_length

    points = {
        "B_start": b_start,
        "B_end": b_end,
        "S_end": s_end,
        "A_end": a_end,
        "D_end": d_end,
        "F_end": f_end,
        "T_end": t_end,
        "Z_end": z_end,
        "P_end": p_end,
    }
    logger.debug(
        f"Primary skeleton: W1={w1:.3f} W2={w2:.3f} fork={fork_length:.3f} "
        f"stay={stay_length:.3f} D_end.x={d_end.x:.3f} S_end.x={s_end.x:.3f}"
    )

    return PrimarySkeleton(
        points=points,
        sizes={"W1_size": w1, "W2_size": w2},
        frame_members=resolve_frame_members(points),
        fork_length=fork_length,
        stay_length=stay_length,
    )


def calculate_axle_points(params: FrameParameters, primary: PrimarySkeleton) -> AxleSkeleton:
    """Add frontAxel, midAxel and rearAxel (hub half-widths on z)."""
    points = dict(primary.points)
    points["frontAxel"] = points["T_end"].with_z(params.frontAxel_Z)
    points["midAxel"] = points["B_start"].with_z(params.midAxel_Z)
    points["rearAxel"] = points["S_end"].with_z(params.rearAxel_Z)
    return AxleSkeleton(points=points, sizes=primary.sizes)


def resolve_frame_members(points: Mapping[str, Vec3]) -> Dict[str, FrameMember]:
    """
    Resolve FRAME_MEMBERS point references against a point set.

    References that are not in ``points`` yet resolve to None.
    """
    members = {}
    for name, spec in FRAME_MEMBERS.items():
        start_ref, end_ref = spec["point_refs"]
        members[name] = FrameMember(
            name=name,
            type=spec["type"],
            start_ref=start_ref,
            end_ref=end_ref,
            start=points.get(start_ref),
            end=points.get(end_ref),
            params=dict(spec["params"]),
        )
    return members
