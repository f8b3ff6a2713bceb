"""
Tests for the external tangent between two circles.
"""

import pytest

from bikeframe.errors import InvalidConfigurationError
from bikeframe.vectors import Vec3
from bikeframe.calculator.tangent import external_tangent


def _cross(u, v):
    return u.x * v.y - u.y * v.x


def _dot(u, v):
    return u.x * v.x + u.y * v.y


class TestExternalTangent:
    """Tests for external_tangent."""

    def test_equal_radii_parallel_to_centre_line(self):
        """Equal radii give tangents parallel to the centre line."""
        a = Vec3(0.0, 0.0, 0.0)
        b = Vec3(10.0, 3.0, 0.0)
        t = external_tangent(a, 2.0, b, 2.0)
        assert t.alpha == 0.0
        assert _cross(t.lower_b - t.lower_a, b - a) == pytest.approx(0.0, abs=1e-12)
        assert _cross(t.upper_b - t.upper_a, b - a) == pytest.approx(0.0, abs=1e-12)

    def test_horizontal_circles(self):
        """Lower tangent is on the right of the travel direction."""
        t = external_tangent(Vec3(0.0, 5.0, 0.0), 5.0, Vec3(20.0, 5.0, 0.0), 5.0)
        # Left-to-right: the right-hand side is below
        assert t.lower_a.x == pytest.approx(0.0)
        assert t.lower_a.y == pytest.approx(0.0)
        assert t.lower_b.x == pytest.approx(20.0)
        assert t.lower_b.y == pytest.approx(0.0)
        assert t.upper_a.y == pytest.approx(10.0)
        assert t.upper_b.y == pytest.approx(10.0)

    @pytest.mark.parametrize("ra, rb", [(1.0, 3.0), (4.0, 1.5), (2.0, 2.0)])
    def test_points_touch_circles_at_right_angles(self, ra, rb):
        """Tangent points lie on the circles and meet the radius at right angles."""
        a = Vec3(-2.0, 1.0, 0.0)
        b = Vec3(9.0, -4.0, 0.0)
        t = external_tangent(a, ra, b, rb)

        assert t.lower_a.distance_to(a) == pytest.approx(ra)
        assert t.lower_b.distance_to(b) == pytest.approx(rb)
        assert t.upper_a.distance_to(a) == pytest.approx(ra)
        assert t.upper_b.distance_to(b) == pytest.approx(rb)

        for pa, pb in ((t.lower_a, t.lower_b), (t.upper_a, t.upper_b)):
            line = pb - pa
            assert _dot(line, pa - a) == pytest.approx(0.0, abs=1e-9)
            assert _dot(line, pb - b) == pytest.approx(0.0, abs=1e-9)

    def test_result_in_frame_plane(self):
        """Tangent points are projected into the frame plane."""
        t = external_tangent(Vec3(0.0, 0.0, 3.0), 1.0, Vec3(5.0, 0.0, -2.0), 2.0)
        assert t.lower_a.z == 0.0
        assert t.upper_b.z == 0.0

    def test_contained_circle_raises(self):
        """d < |r_b - r_a| has no external tangent."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            external_tangent(Vec3(0.0, 0.0, 0.0), 1.0, Vec3(2.0, 0.0, 0.0), 5.0, fields=("D2_count",))
        assert exc_info.value.fields == ("D2_count",)

    def test_coincident_centres_raise(self):
        """Coincident centres are rejected."""
        with pytest.raises(InvalidConfigurationError):
            external_tangent(Vec3(1.0, 1.0, 0.0), 1.0, Vec3(1.0, 1.0, 0.0), 1.0)
