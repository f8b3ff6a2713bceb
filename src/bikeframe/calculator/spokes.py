"""
Spoke lacing pattern for one wheel.

Each wheel has 18 holes per hub flange and 18 per rim ring, laced 3-cross.
Points are in the wheel's local frame (hub axis along Z, origin at the hub
centre); placement in world space is done by ``placement.place_spokes``.

Hub holes alternate red (even index) and yellow (odd index). The left
flange and left rim ring are phase-shifted by half a section.
"""

from math import cos, sin, pi
from typing import List

from ..io.loaders import FrameParameters, Spoke, SpokeRings, SpokeSet, SpokePattern, SpokePatterns
from ..vectors import Vec3
from .constants import (
    SPOKES_PER_FLANGE,
    SPOKE_CROSS_COUNT,
    SPOKES_PER_FAMILY_SIDE,
    SPOKE_RING_PHASE,
    EVEN_RIM_INDICES,
    ODD_RIM_INDICES,
)


def _ring(radius: float, z: float, phase: float = 0.0) -> List[Vec3]:
    points = []
    for i in range(SPOKES_PER_FLANGE):
        angle = i * 2 * pi / SPOKES_PER_FLANGE + phase
        points.append(Vec3(radius * cos(angle), radius * sin(angle), z))
    return points


def _lace(hub: List[Vec3], rim: List[Vec3], first_hole: int, table, shift: int) -> List[Spoke]:
    spokes = []
    for count, hub_index in enumerate(range(first_hole, SPOKES_PER_FLANGE, 2)):
        rim_index = table[(count + shift) % SPOKES_PER_FAMILY_SIDE]
        spokes.append(Spoke(
            start=hub[hub_index],
            end=rim[rim_index],
            hub_index=hub_index,
            rim_index=rim_index,
        ))
    return spokes


def calculate_spoke_pattern(params: FrameParameters, radius: float, is_rear: bool = False) -> SpokePattern:
    """
    Hub and rim holes plus lacing for a wheel of the given rim radius.

    Args:
        params: Frame parameters (front wheel uses the *_F hub values, rear
            the *_R values)
        radius: Rim radius (R1_size or R2_size)
        is_rear: Select the rear hub parameters

    Returns:
        SpokePattern with 18 points per ring and 36 spokes
    """
    if is_rear:
        hub_radius = params.hub_radius_R
        hub_offset = params.hub_offset_R
        rim_offset = params.rim_offset_R
        red_offset = params.hub_red_offset_R
        yellow_offset = params.hub_yellow_offset_R
    else:
        hub_radius = params.hub_radius_F
        hub_offset = params.hub_offset_F
        rim_offset = params.rim_offset_F
        red_offset = params.hub_red_offset_F
        yellow_offset = params.hub_yellow_offset_F

    hub_right = []
    hub_left = []
    for i in range(SPOKES_PER_FLANGE):
        angle = i * 2 * pi / SPOKES_PER_FLANGE
        flange_z = hub_offset * 0.5 + (red_offset if i % 2 == 0 else yellow_offset)
        hub_right.append(Vec3(hub_radius * cos(angle), hub_radius * sin(angle), flange_z))
        left_angle = angle + SPOKE_RING_PHASE
        hub_left.append(Vec3(hub_radius * cos(left_angle), hub_radius * sin(left_angle), -flange_z))

    rim_right = _ring(radius, rim_offset * 0.5)
    rim_left = _ring(radius, -rim_offset * 0.5, SPOKE_RING_PHASE)

    cross = SPOKE_CROSS_COUNT
    back = SPOKES_PER_FAMILY_SIDE - cross
    red = (
        _lace(hub_right, rim_right, 0, EVEN_RIM_INDICES, cross)
        + _lace(hub_left, rim_left, 0, EVEN_RIM_INDICES, back)
    )
    yellow = (
        _lace(hub_right, rim_right, 1, ODD_RIM_INDICES, back)
        + _lace(hub_left, rim_left, 1, ODD_RIM_INDICES, cross)
    )

    return SpokePattern(
        points=SpokeRings(
            hub_points_right=hub_right,
            hub_points_left=hub_left,
            rim_points_right=rim_right,
            rim_points_left=rim_left,
        ),
        spokes=SpokeSet(red=red, yellow=yellow),
    )


def calculate_spoke_patterns(params: FrameParameters) -> SpokePatterns:
    """Front (R1_size) and rear (R2_size) spoke patterns."""
    return SpokePatterns(
        front=calculate_spoke_pattern(params, params.R1_size, is_rear=False),
        rear=calculate_spoke_pattern(params, params.R2_size, is_rear=True),
    )
