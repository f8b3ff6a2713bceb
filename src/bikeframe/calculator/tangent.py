"""
External tangent between two coplanar circles.

Used twice: for the chain line between sprocket and driver, and for the
ground line under both wheels. Only the XY plane is considered.
"""

from dataclasses import dataclass
from math import atan2, cos, sin
from typing import Iterable

from ..errors import InvalidConfigurationError
from ..vectors import Vec3, checked_asin
from .constants import DEGENERATE_EPSILON


@dataclass(frozen=True)
class ExternalTangents:
    """
    Both external tangent lines between circle ``a`` (from) and ``b`` (to).

    ``lower_*`` touch the circles on the right-hand side of the a->b
    direction, ``upper_*`` on the left-hand side.
    """
    lower_a: Vec3
    lower_b: Vec3
    upper_a: Vec3
    upper_b: Vec3
    theta: float
    alpha: float


def external_tangent(
    center_a: Vec3,
    radius_a: float,
    center_b: Vec3,
    radius_b: float,
    fields: Iterable[str] = (),
) -> ExternalTangents:
    """
    Compute the external tangents between two circles.

    theta = -atan2(b - a) and alpha = asin((r_b - r_a) / d); the tangent
    points sit at the normals (sin(theta +/- alpha), cos(theta +/- alpha)).

    Args:
        center_a, radius_a: First circle
        center_b, radius_b: Second circle
        fields: Parameter names reported if the tangent does not exist

    Returns:
        ExternalTangents; the returned points have z = 0

    Raises:
        InvalidConfigurationError: If the centres coincide or one circle
            contains the other (d < |r_b - r_a|)
    """
    fields = tuple(fields)
    dx = center_b.x - center_a.x
    dy = center_b.y - center_a.y
    distance = (dx * dx + dy * dy) ** 0.5

    if distance < DEGENERATE_EPSILON:
        raise InvalidConfigurationError("Tangent circles share the same centre", fields)

    theta = -atan2(dy, dx)
    alpha = checked_asin(
        (radius_b - radius_a) / distance,
        fields,
        "No external tangent: one circle lies inside the other",
    )

    n_lower = Vec3(sin(theta + alpha), cos(theta + alpha), 0.0)
    n_upper = Vec3(sin(theta - alpha), cos(theta - alpha), 0.0)
    a = center_a.with_z(0.0)
    b = center_b.with_z(0.0)

    return ExternalTangents(
        lower_a=a - n_lower * radius_a,
        lower_b=b - n_lower * radius_b,
        upper_a=a + n_upper * radius_a,
        upper_b=b + n_upper * radius_b,
        theta=theta,
        alpha=alpha,
    )
