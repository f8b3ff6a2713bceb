"""
World-space placement of wheel- and crank-attached hardware.

Spoke patterns and gear teeth are defined in local frames. Every placement
here applies ``rotations.total`` so the hardware stays phased with the
leveled frame.
"""

from dataclasses import dataclass
from math import cos, sin, pi
from typing import List, Tuple

from ..enums import WheelPosition
from ..io.loaders import BikeGeometry, FrameParameters, Spoke, SpokeSet
from ..vectors import Vec3, rotate_z
from .constants import TOOTH_RADIAL_OFFSET
from .drivetrain import is_left_foot_forward


@dataclass(frozen=True)
class ToothPlacement:
    position: Vec3
    angle: float  # World orientation of the tooth (radians)


def wheel_center(geometry: BikeGeometry, wheel: WheelPosition) -> Vec3:
    """Hub centre of a wheel in the frame plane (T_end front, S_end rear)."""
    return geometry.points["T_end" if wheel == WheelPosition.FRONT else "S_end"]


def place_wheel_point(geometry: BikeGeometry, wheel: WheelPosition, local: Vec3) -> Vec3:
    """Map a wheel-local point to world space: centre + Rz(total) * local."""
    return rotate_z(local, geometry.rotations.total) + wheel_center(geometry, wheel)


def place_spokes(geometry: BikeGeometry, wheel: WheelPosition) -> SpokeSet:
    """Spokes of one wheel with world-space end points."""
    pattern = geometry.spoke_patterns.front if wheel == WheelPosition.FRONT else geometry.spoke_patterns.rear

    def place(spokes: Tuple[Spoke, ...]) -> List[Spoke]:
        return [
            Spoke(
                start=place_wheel_point(geometry, wheel, s.start),
                end=place_wheel_point(geometry, wheel, s.end),
                hub_index=s.hub_index,
                rim_index=s.rim_index,
            )
            for s in spokes
        ]

    return SpokeSet(red=place(pattern.spokes.red), yellow=place(pattern.spokes.yellow))


def _teeth(center: Vec3, pitch_radius: float, count: int, total_rotation: float) -> List[ToothPlacement]:
    radius = pitch_radius + TOOTH_RADIAL_OFFSET
    placements = []
    for i in range(count):
        angle = i * 2 * pi / count + total_rotation
        position = Vec3(center.x + cos(angle) * radius, center.y + sin(angle) * radius, center.z)
        placements.append(ToothPlacement(position=position, angle=angle))
    return placements


def sprocket_teeth(geometry: BikeGeometry) -> List[ToothPlacement]:
    """Tooth placements around Spkt_Center (D2_count teeth)."""
    return _teeth(
        geometry.points["Spkt_Center"],
        geometry.sizes["D2_size"],
        geometry.params.D2_count,
        geometry.rotations.total,
    )


def driver_teeth(geometry: BikeGeometry) -> List[ToothPlacement]:
    """Tooth placements around Drv_Center (D1_count teeth)."""
    return _teeth(
        geometry.points["Drv_Center"],
        geometry.sizes["D1_size"],
        geometry.params.D1_count,
        geometry.rotations.total,
    )


def stance_rotation(params: FrameParameters) -> float:
    """Z rotation for crank-attached hardware: 0 left foot forward, else pi."""
    return 0.0 if is_left_foot_forward(params) else pi
