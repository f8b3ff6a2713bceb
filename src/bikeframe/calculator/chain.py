"""
Chain path around the sprocket and driver.

Link positions on the gears sit between teeth. Tooth phase is fixed to the
frame, not the world: arc angles are computed relative to the frame
(world angle minus ``rotations.total``) and rotated back, so the chain stays
meshed with the rendered teeth however the bike was leveled.
"""

import logging
from dataclasses import dataclass
from math import atan2, cos, floor, pi, sin
from typing import List, Optional, Tuple

from ..enums import ChainLinkKind
from ..io.loaders import BikeGeometry
from ..vectors import Vec3, rotate_z
from .constants import CHAIN_RUN_OFFSET, CHAIN_ARC_TOLERANCE, CHAIN_ARC_ITERATION_MARGIN

logger = logging.getLogger(__name__)

TWO_PI = 2 * pi


@dataclass(frozen=True)
class ChainLink:
    """One link pin position with its world-space orientation angle."""
    position: Vec3
    angle: float
    kind: ChainLinkKind = ChainLinkKind.HALF


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2pi)."""
    return angle % TWO_PI


def _js_round(value: float) -> int:
    # Halves round up, not to even
    return int(floor(value + 0.5))


def _in_arc(angle: float, start: float, end: float, unwrapped_end: float) -> bool:
    tol = CHAIN_ARC_TOLERANCE
    a = normalize_angle(angle)
    if start <= end:
        if start - tol <= a <= end + tol:
            return True
    elif a >= start - tol or a <= end + tol:
        return True
    return start - tol <= angle <= unwrapped_end + tol


def gear_arc_points(
    center: Vec3,
    radius: float,
    frame_start: float,
    frame_end: float,
    teeth: int,
    total_rotation: float,
) -> List[Tuple[Vec3, float]]:
    """
    Chain points between teeth on a gear arc.

    Args:
        center: Gear centre (world)
        radius: Pitch radius
        frame_start, frame_end: Arc limits relative to the frame (radians)
        teeth: Tooth count
        total_rotation: Leveling rotation to phase the teeth

    Returns:
        List of (world position, world angle) in arc order
    """
    start = normalize_angle(frame_start)
    end = normalize_angle(frame_end)
    unwrapped_end = end if end > start else end + TWO_PI

    per_tooth = TWO_PI / teeth
    current = _js_round(start / per_tooth) * per_tooth
    points = []

    for _ in range(teeth * 2 + CHAIN_ARC_ITERATION_MARGIN):
        if current > unwrapped_end:
            break
        link_angle = current + per_tooth / 2
        if link_angle > unwrapped_end + CHAIN_ARC_TOLERANCE:
            break
        if _in_arc(link_angle, start, end, unwrapped_end):
            relative = rotate_z(Vec3(radius * cos(link_angle), radius * sin(link_angle), 0.0), total_rotation)
            points.append((relative + center, normalize_angle(link_angle + total_rotation)))
        current += per_tooth
    else:
        logger.warning(f"Chain arc walk hit the iteration limit ({teeth} teeth)")

    return points


def run_points(start: Vec3, end: Vec3, spacing: float) -> List[Tuple[Vec3, float]]:
    """
    Evenly spaced chain points on a straight run, excluding both ends.

    Points are pushed sideways by CHAIN_RUN_OFFSET so links sit on the
    tangent line rather than through the pin centres.
    """
    direction = end - start
    distance = direction.length()
    if distance < 1e-6 or spacing < 1e-6:
        return []

    count = _js_round(distance / spacing)
    if count <= 1:
        return []

    planar = Vec3(direction.x, direction.y, 0.0).normalized()
    offset = Vec3(-planar.y, planar.x, 0.0) * CHAIN_RUN_OFFSET
    angle = atan2(direction.y, direction.x)

    return [(start + direction * (i / count) + offset, angle) for i in range(1, count)]


def calculate_chain_path(geometry: BikeGeometry) -> List[ChainLink]:
    """
    Full chain loop: sprocket arc S1->S2, run to D2, driver arc D2->D1,
    run back to S1.

    Link spacing on the runs equals the sprocket's tooth pitch. With
    chainFullEnabled links alternate between FULL_A and FULL_B plates,
    otherwise every link is HALF.

    Returns:
        Chain links in loop order; empty if either arc has no points
    """
    points = geometry.points
    sizes = geometry.sizes
    params = geometry.params
    total = geometry.rotations.total

    spacing = TWO_PI * sizes["D2_size"] / params.D2_count

    sprocket = points["Spkt_Center"]
    driver = points["Drv_Center"]

    def frame_angle(tangent_point: Vec3, center: Vec3) -> float:
        return normalize_angle(atan2(tangent_point.y - center.y, tangent_point.x - center.x) - total)

    sprocket_arc = gear_arc_points(
        sprocket, sizes["D2_size"],
        frame_angle(points["tangentPointS1"], sprocket),
        frame_angle(points["tangentPointS2"], sprocket),
        params.D2_count, total,
    )
    driver_arc = gear_arc_points(
        driver, sizes["D1_size"],
        frame_angle(points["tangentPointD2"], driver),
        frame_angle(points["tangentPointD1"], driver),
        params.D1_count, total,
    )

    if not sprocket_arc or not driver_arc:
        logger.warning("Could not place chain points on the gears")
        return []

    to_driver = run_points(sprocket_arc[-1][0], driver_arc[0][0], spacing)
    to_sprocket = run_points(driver_arc[-1][0], sprocket_arc[0][0], spacing)
    path = sprocket_arc + to_driver + driver_arc + to_sprocket

    links = []
    for index, (position, angle) in enumerate(path):
        links.append(ChainLink(position=position, angle=angle, kind=_link_kind(params.chainFullEnabled, index)))
    return links


def _link_kind(full_chain: bool, index: int) -> ChainLinkKind:
    if not full_chain:
        return ChainLinkKind.HALF
    return ChainLinkKind.FULL_A if index % 2 == 0 else ChainLinkKind.FULL_B


def chain_link_counts(links: List[ChainLink]) -> Optional[dict]:
    """Number of links of each kind, or None for an empty path."""
    if not links:
        return None
    counts = {}
    for link in links:
        counts[link.kind.value] = counts.get(link.kind.value, 0) + 1
    return counts
