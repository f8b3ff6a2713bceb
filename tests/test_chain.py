"""
Tests for the chain path around sprocket and driver.
"""

from math import cos, pi

import pytest

from bikeframe.enums import ChainLinkKind
from bikeframe.vectors import Vec3
from bikeframe.calculator import calculate_geometry
from bikeframe.calculator.chain import (
    calculate_chain_path,
    chain_link_counts,
    gear_arc_points,
    normalize_angle,
    run_points,
)


def _planar_distance(a, b):
    return ((a.x - b.x) ** 2 + (a.y - b.y) ** 2) ** 0.5


class TestAngles:
    """Tests for angle helpers."""

    def test_normalize_angle(self):
        """Angles are normalized into [0, 2pi)."""
        assert normalize_angle(-0.1) == pytest.approx(2 * pi - 0.1)
        assert normalize_angle(2 * pi) == pytest.approx(0.0)
        assert normalize_angle(7.0) == pytest.approx(7.0 - 2 * pi)


class TestGearArc:
    """Tests for links placed around a gear."""

    def test_links_sit_between_teeth(self):
        """Links are offset half a tooth from tooth centres."""
        points = gear_arc_points(Vec3(0.0, 0.0, 0.0), 1.0, 0.0, pi, 4, 0.0)
        angles = [angle for _, angle in points]
        assert angles == pytest.approx([pi / 4, 3 * pi / 4])

    def test_rotation_phases_links(self):
        """Total rotation shifts link phase around the centre."""
        center = Vec3(2.0, 1.0, 3.0)
        points = gear_arc_points(center, 1.0, 0.0, pi, 4, 0.3)
        position, angle = points[0]
        assert angle == pytest.approx(pi / 4 + 0.3)
        assert position.x == pytest.approx(2.0 + cos(pi / 4 + 0.3))
        assert position.z == 3.0

    def test_wrapping_arc(self):
        """An arc crossing angle zero wraps through 2pi."""
        points = gear_arc_points(Vec3(0.0, 0.0, 0.0), 1.0, 3 * pi / 2, pi / 2, 4, 0.0)
        angles = [angle for _, angle in points]
        assert angles == pytest.approx([7 * pi / 4, pi / 4])


class TestRun:
    """Tests for straight chain runs."""

    def test_evenly_spaced_excluding_ends(self):
        """Run links are one pitch apart, skip both ends and sit just off the line."""
        points = run_points(Vec3(0.0, 0.0, 0.0), Vec3(10.0, 0.0, 0.0), 1.0)
        assert len(points) == 9
        assert [p.x for p, _ in points] == pytest.approx([float(i) for i in range(1, 10)])
        assert all(p.y == pytest.approx(-0.07) for p, _ in points)
        assert all(angle == 0.0 for _, angle in points)

    def test_degenerate_run(self):
        """A run shorter than one pitch has no links."""
        assert run_points(Vec3(1.0, 1.0, 0.0), Vec3(1.0, 1.0, 0.0), 1.0) == []
        assert run_points(Vec3(0.0, 0.0, 0.0), Vec3(0.4, 0.0, 0.0), 1.0) == []


class TestChainPath:
    """Tests for the full chain loop."""

    def test_loop_is_populated(self, default_geometry):
        """Path has more links than driver teeth, all half links by default."""
        links = calculate_chain_path(default_geometry)
        assert len(links) > default_geometry.params.D1_count
        assert all(link.kind == ChainLinkKind.HALF for link in links)

    def test_starts_on_sprocket(self, default_geometry):
        """First link sits on the sprocket."""
        links = calculate_chain_path(default_geometry)
        first = links[0].position
        sprocket = default_geometry.points["Spkt_Center"]
        assert _planar_distance(first, sprocket) == pytest.approx(default_geometry.sizes["D2_size"])
        assert first.z == sprocket.z

    def test_some_links_on_driver(self, default_geometry):
        """Some links wrap the driver."""
        links = calculate_chain_path(default_geometry)
        driver = default_geometry.points["Drv_Center"]
        radius = default_geometry.sizes["D1_size"]
        on_driver = [
            link for link in links
            if _planar_distance(link.position, driver) == pytest.approx(radius) and link.position.z == driver.z
        ]
        assert on_driver

    def test_full_chain_alternates(self, default_params):
        """Full chain alternates outer and inner plates."""
        default_params["chainFullEnabled"] = True
        links = calculate_chain_path(calculate_geometry(default_params))
        assert links[0].kind == ChainLinkKind.FULL_A
        assert links[1].kind == ChainLinkKind.FULL_B
        assert links[2].kind == ChainLinkKind.FULL_A

    def test_link_counts(self, default_geometry):
        """Link counts match the path length."""
        links = calculate_chain_path(default_geometry)
        counts = chain_link_counts(links)
        assert counts == {"half": len(links)}

    def test_empty_counts(self):
        """Empty chain has no counts."""
        assert chain_link_counts([]) is None
