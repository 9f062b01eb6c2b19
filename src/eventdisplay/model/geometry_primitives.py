"""
Geometric Primitives for the detector scene.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union, TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt

@dataclass
class Vector:
    """
    A vector in 3D space used for offsets between points.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


@dataclass
class Point:
    """A simple geometric point in 3D space."""
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        raise TypeError("Can only subtract a Vector or Point to a Point.")

    def scaled(self, factor: float) -> Point:
        """Return the point scaled about the origin."""
        return Point(self.x * factor, self.y * factor, self.z * factor)

    def radial_distance(self) -> float:
        """Distance from the z (beam) axis."""
        return math.hypot(self.x, self.y)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


ORIGIN = Point(0.0, 0.0, 0.0)


@dataclass
class Quad:
    """
    Planar polygon with exactly four ordered vertices.
    Used for the end-cap wall segments and for the ground cells.
    """
    v1: Point
    v2: Point
    v3: Point
    v4: Point

    @property
    def vertices(self) -> Tuple[Point, Point, Point, Point]:
        return self.v1, self.v2, self.v3, self.v4

    def translated(self, offset: Vector) -> Quad:
        """Return a copy of the quad moved by `offset`."""
        return Quad(self.v1 + offset, self.v2 + offset, self.v3 + offset, self.v4 + offset)

    def contains_xy(self, x: float, y: float) -> bool:
        """Half-open containment test for axis-aligned quads (cells)."""
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return min(xs) <= x < max(xs) and min(ys) <= y < max(ys)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([v.to_array() for v in self.vertices])


@dataclass
class Plane:
    """
    Small rectangular detector placed around the tube.
    `angle` is both the polar position and the facing, so the plane
    stays tangent to the circle it was placed on.
    """
    position: Point
    width: float
    height: float
    angle: float

    def to_quad(self) -> Quad:
        """
        Corners of the rectangle: width along the tangent of the circle,
        height along the beam (z) axis.
        """
        half_w = Vector(-math.sin(self.angle), math.cos(self.angle), 0.0) * (self.width * 0.5)
        half_h = Vector(0.0, 0.0, self.height * 0.5)
        p = self.position
        return Quad(
            p - half_w - half_h,
            p + half_w - half_h,
            p + half_w + half_h,
            p - half_w + half_h,
        )


@dataclass
class Block:
    """Box-shaped calorimeter volume. Its size comes from the Dimensions."""
    position: Point


@dataclass
class Track:
    """
    Curved particle path from the interaction point.
    Drawn as a cubic Bezier with `control` used for both inner control points.
    """
    start: Point
    control: Point
    end: Point

    def discretize(self, resolution: int = 24) -> npt.NDArray[np.float64]:
        """Sample the curve into a (resolution, 3) polyline."""
        resolution = max(2, resolution)
        t = np.linspace(0.0, 1.0, resolution)[:, None]
        p0 = self.start.to_array()
        p1 = self.control.to_array()
        p3 = self.end.to_array()
        u = 1.0 - t
        # Bernstein form with p1 == p2
        return u**3 * p0 + 3.0 * u * u * t * p1 + 3.0 * u * t * t * p1 + t**3 * p3

