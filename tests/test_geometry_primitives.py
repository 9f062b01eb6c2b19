import math

import numpy as np
import pytest

from eventdisplay.model.geometry_primitives import Plane, Point, Quad, Track, Vector


def test_point_vector_arithmetic():
    p = Point(1.0, 2.0, 3.0)
    v = Vector(0.5, -1.0, 2.0)
    assert p + v == Point(1.5, 1.0, 5.0)
    assert p - v == Point(0.5, 3.0, 1.0)
    assert Point(2.0, 2.0, 2.0) - p == Vector(1.0, 0.0, -1.0)
    assert p.scaled(0.5) == Point(0.5, 1.0, 1.5)
    with pytest.raises(TypeError):
        p + p


def test_vector_sum_and_scale():
    v = Vector(1.0, -2.0) + Vector(0.5, 0.5, 4.0)
    assert v == Vector(1.5, -1.5, 4.0)
    assert v * 2.0 == Vector(3.0, -3.0, 8.0)
    assert v.to_array() == pytest.approx(np.array([1.5, -1.5, 4.0]))


def test_quad_translated_keeps_z():
    quad = Quad(Point(0, 0, 7), Point(1, 0, 7), Point(1, 1, 7), Point(0, 1, 7))
    moved = quad.translated(Vector(2.0, -3.0))
    assert moved.v1 == Point(2.0, -3.0, 7.0)
    assert moved.v3 == Point(3.0, -2.0, 7.0)
    assert all(v.z == 7 for v in moved.vertices)
    assert quad.v1 == Point(0, 0, 7)


def test_quad_contains_xy_half_open():
    quad = Quad(Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1))
    assert quad.contains_xy(0.0, 0.0)
    assert quad.contains_xy(0.5, 0.999)
    assert not quad.contains_xy(1.0, 0.5)
    assert not quad.contains_xy(0.5, 1.0)


def test_plane_to_quad_is_tangent_to_circle():
    angle = 0.7
    radius = 80.0
    plane = Plane(Point(math.cos(angle) * radius, math.sin(angle) * radius, 12.0), width=10.0, height=20.0, angle=angle)
    corners = plane.to_quad().to_array()

    assert corners.mean(axis=0) == pytest.approx(plane.position.to_array())
    radial = np.array([math.cos(angle), math.sin(angle), 0.0])
    # every corner lies in the plane perpendicular to the radius
    for corner in corners:
        assert np.dot(corner - plane.position.to_array(), radial) == pytest.approx(0.0, abs=1e-9)
    assert np.linalg.norm(corners[1] - corners[0]) == pytest.approx(10.0)
    assert np.linalg.norm(corners[3] - corners[0]) == pytest.approx(20.0)


def test_track_discretize_endpoints():
    track = Track(Point(0, 0, 0), Point(5, 5, 5), Point(4, -2, 10))
    pts = track.discretize(16)
    assert pts.shape == (16, 3)
    assert pts[0] == pytest.approx(np.zeros(3))
    assert pts[-1] == pytest.approx(np.array([4.0, -2.0, 10.0]))


def test_track_discretize_midpoint():
    track = Track(Point(0, 0, 0), Point(2, 4, 0), Point(4, 0, 0))
    mid = track.discretize(3)[1]
    # B(0.5) = 0.125 p0 + 0.75 p1 + 0.125 p3
    assert mid == pytest.approx(np.array([0.75 * 2 + 0.125 * 4, 0.75 * 4, 0.0]))
