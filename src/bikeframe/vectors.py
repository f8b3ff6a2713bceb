"""
Vector math for frame geometry.

A small immutable 3D vector and the handful of operations the solvers need:
arithmetic, normalization, and rotations about the principal axes (optionally
around a pivot). Rotations follow the right-hand rule with angles in radians.

Everything here is plain ``math``; there is no NumPy dependency so the
calculator stays importable in Pyodide.
"""

from dataclasses import dataclass
from math import acos, asin, cos, sin, sqrt, isfinite
from typing import Iterable, Mapping

from .errors import InvalidConfigurationError

# Slack allowed on inverse-trig arguments before they are rejected
TRIG_DOMAIN_TOLERANCE = 1e-12


@dataclass(frozen=True)
class Vec3:
    """Immutable 3D point / direction (centimetres)."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vec3":
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def length(self) -> float:
        return sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to(self, other: "Vec3") -> float:
        return (self - other).length()

    def normalized(self) -> "Vec3":
        """
        Unit vector in the same direction.

        A zero vector stays a zero vector, which keeps degenerate
        attachments (e.g. coincident tube ends) finite.
        """
        length = self.length()
        if length == 0.0:
            return Vec3(0.0, 0.0, 0.0)
        return Vec3(self.x / length, self.y / length, self.z / length)

    def with_z(self, z: float) -> "Vec3":
        return Vec3(self.x, self.y, z)

    def offset_z(self, dz: float) -> "Vec3":
        return Vec3(self.x, self.y, self.z + dz)

    def is_finite(self) -> bool:
        return isfinite(self.x) and isfinite(self.y) and isfinite(self.z)


def rotate_z(p: Vec3, angle: float) -> Vec3:
    """Rotate about the Z axis through the origin."""
    c, s = cos(angle), sin(angle)
    return Vec3(c * p.x - s * p.y, s * p.x + c * p.y, p.z)


def rotate_x(p: Vec3, angle: float) -> Vec3:
    """Rotate about the X axis through the origin."""
    c, s = cos(angle), sin(angle)
    return Vec3(p.x, c * p.y - s * p.z, s * p.y + c * p.z)


def rotate_y(p: Vec3, angle: float) -> Vec3:
    """Rotate about the Y axis through the origin."""
    c, s = cos(angle), sin(angle)
    return Vec3(c * p.x + s * p.z, p.y, -s * p.x + c * p.z)


def rotate_about(pivot: Vec3, p: Vec3, angle: float) -> Vec3:
    """
    Rotate ``p`` in the XY plane about ``pivot``.

    p' = q + R(angle)(p - q); the Z coordinate of ``p`` is preserved.
    """
    rotated = rotate_z(Vec3(p.x - pivot.x, p.y - pivot.y, 0.0), angle)
    return Vec3(rotated.x + pivot.x, rotated.y + pivot.y, p.z)


def rotate_about_x(pivot: Vec3, p: Vec3, angle: float) -> Vec3:
    """Rotate ``p`` about an X-parallel axis passing through ``pivot``."""
    return rotate_x(p - pivot, angle) + pivot


def rotate_points(points: Mapping[str, Vec3], pivot: Vec3, angle: float) -> dict:
    """Rotate every point of a name->point mapping about ``pivot`` (XY plane)."""
    return {name: rotate_about(pivot, p, angle) for name, p in points.items()}


def checked_acos(value: float, fields: Iterable[str], message: str) -> float:
    """acos that raises InvalidConfigurationError instead of returning NaN."""
    return acos(_check_unit_range(value, fields, message))


def checked_asin(value: float, fields: Iterable[str], message: str) -> float:
    """asin that raises InvalidConfigurationError instead of returning NaN."""
    return asin(_check_unit_range(value, fields, message))


def _check_unit_range(value: float, fields: Iterable[str], message: str) -> float:
    if not isfinite(value) or abs(value) > 1.0 + TRIG_DOMAIN_TOLERANCE:
        raise InvalidConfigurationError(f"{message} (ratio {value:.4f} outside [-1, 1])", fields)
    # Rounding noise just past +/-1
    return max(-1.0, min(1.0, value))
