"""
Wheel leveling: rotate the solved bike so it stands on the ground.

Two rotations in the XY plane, applied to the complete point set:

1. Wheelbase: about the rear axle so both axles are at the same height.
2. Wheel tangent: about the midpoint of the wheels' common lower tangent so
   the tangent is horizontal, then a translation putting it on y = 0.

With equal wheels the second rotation is zero. The combined angle is
exposed as ``rotations.total``; wheel-attached hardware must be rotated by
it to stay phased with the frame.
"""

import logging
from math import atan2, pi

from ..vectors import Vec3, rotate_points
from .stages import GearedSkeleton, WheelbaseLeveledSkeleton, LeveledSkeleton
from .tangent import external_tangent

logger = logging.getLogger(__name__)


def level_wheelbase(geared: GearedSkeleton) -> WheelbaseLeveledSkeleton:
    """Rotate about S_end so that T_end and S_end share the same y."""
    front = geared.points["T_end"]
    rear = geared.points["S_end"]
    angle = -atan2(front.y - rear.y, front.x - rear.x) + pi

    points = rotate_points(geared.points, rear, angle)
    logger.debug(f"Wheelbase leveling rotation: {angle:.6f} rad")
    return WheelbaseLeveledSkeleton(points=points, sizes=geared.sizes, wheelbase_rotation=angle)


def level_wheel_tangent(stage: WheelbaseLeveledSkeleton) -> LeveledSkeleton:
    """
    Put the wheels' common lower tangent on the ground line.

    Adds tangentPointA (front wheel) and tangentPointB (rear wheel) and
    records bbHeight, the bottom bracket's height above the ground.

    Raises:
        InvalidConfigurationError: If the wheel circles have no external
            tangent
    """
    w1 = stage.sizes["W1_size"]
    w2 = stage.sizes["W2_size"]
    tangents = external_tangent(
        stage.points["T_end"], w1,
        stage.points["S_end"], w2,
        fields=("R1_size", "T1_size", "R2_size", "T2_size"),
    )
    contact_front = tangents.lower_a
    contact_rear = tangents.lower_b

    midpoint = (contact_front + contact_rear) * 0.5
    tangent_angle = atan2(contact_rear.y - contact_front.y, contact_rear.x - contact_front.x)
    rotation = -tangent_angle

    points = dict(stage.points)
    points["tangentPointA"] = contact_front
    points["tangentPointB"] = contact_rear

    # The midpoint is the pivot, so it is unchanged by the rotation
    drop = Vec3(0.0, midpoint.y, 0.0)
    points = {name: p - drop for name, p in rotate_points(points, midpoint, rotation).items()}

    sizes = dict(stage.sizes)
    sizes["bbHeight"] = points["B_start"].y

    logger.debug(
        f"Wheel tangent leveling rotation: {rotation:.6f} rad, "
        f"total {stage.wheelbase_rotation + rotation:.6f} rad, bbHeight {sizes['bbHeight']:.3f}"
    )
    return LeveledSkeleton(
        points=points,
        sizes=sizes,
        wheelbase_rotation=stage.wheelbase_rotation,
        wheel_tangent_rotation=rotation,
    )


def level_skeleton(geared: GearedSkeleton) -> LeveledSkeleton:
    """Apply both leveling rotations."""
    return level_wheel_tangent(level_wheelbase(geared))
