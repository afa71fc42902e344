"""Immutable point, vector, unit-vector, quaternion and segment value types.

Only constructors and arithmetic live here; derived operations (distances,
projections, rotations) are free functions in ``geom.geometry``.

Equality is deliberately not value based: ``==`` falls back to identity.
Compare coordinates with ``geom.geometry.is_equal(a, b, tol)``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from .constants import CHECKED
from .errors import DivideByZeroError, UnitizingError
from .tolerance import check_finite, is_negligible_divisor, is_negligible_length_sq, is_one

Coord = tuple[float, float]


class BBox(NamedTuple):
    xmin: float; ymin: float; xmax: float; ymax: float


def _fail_divide(op: str, value, f: float):
    raise DivideByZeroError(f"{value} cannot be divided by {f}", op=op, values=(value, f))


# ============================================================
# 2D Types
# ============================================================
@dataclass(frozen=True, slots=True, eq=False)
class Point2:
    """A location in the plane."""
    x: float
    y: float

    def __post_init__(self):
        if CHECKED:
            check_finite("Point2", self.x, self.y)

    def __iter__(self):
        yield self.x; yield self.y

    def __add__(self, other: Vector2) -> Point2:
        if isinstance(other, Vector2):
            return Point2(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __sub__(self, other):
        # Point - Point = Vector, Point - Vector = Point
        if isinstance(other, Point2):
            return Vector2(self.x - other.x, self.y - other.y)
        if isinstance(other, Vector2):
            return Point2(self.x - other.x, self.y - other.y)
        return NotImplemented


@dataclass(frozen=True, slots=True, eq=False)
class Vector2:
    """A displacement in the plane."""
    x: float
    y: float

    def __post_init__(self):
        if CHECKED:
            check_finite(type(self).__name__, self.x, self.y)

    def __iter__(self):
        yield self.x; yield self.y

    def __add__(self, other: Vector2) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __sub__(self, other: Vector2) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x - other.x, self.y - other.y)
        return NotImplemented

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __mul__(self, f: float) -> Vector2:
        if isinstance(f, (int, float)):
            return Vector2(self.x * f, self.y * f)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, f: float) -> Vector2:
        if is_negligible_divisor(f):
            _fail_divide("Vector2.__truediv__", self, f)
        return Vector2(self.x / f, self.y / f)

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2) -> float:
        """Z component of the 3D cross product; positive if *other* is to the left."""
        return self.x * other.y - self.y * other.x

    @property
    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def length(self) -> float:
        return math.sqrt(self.length_sq)

    def rotate90_ccw(self) -> Vector2:
        return Vector2(-self.y, self.x)

    def rotate90_cw(self) -> Vector2:
        return Vector2(self.y, -self.x)


@dataclass(frozen=True, slots=True, eq=False)
class UnitVector2(Vector2):
    """A direction in the plane; length is one within UNIT_TOLERANCE.

    Build one with ``UnitVector2.create(x, y)`` or ``geom.geometry.unitize``.
    """

    def __post_init__(self):
        if CHECKED:
            check_finite("UnitVector2", self.x, self.y)
            if not is_one(self.x * self.x + self.y * self.y):
                raise UnitizingError(f"length of ({self.x}, {self.y}) is not one",
                                     op="UnitVector2", values=(self.x, self.y))

    @classmethod
    def create(cls, x: float, y: float) -> UnitVector2:
        """Normalise (x, y); raises TooSmallError for a negligible input."""
        from .geometry import unitize
        return unitize(Vector2(x, y))

    @classmethod
    def _unchecked(cls, x: float, y: float) -> UnitVector2:
        # caller guarantees x*x + y*y == 1
        u = object.__new__(cls)
        object.__setattr__(u, "x", x)
        object.__setattr__(u, "y", y)
        return u

    def __neg__(self) -> UnitVector2:
        return UnitVector2._unchecked(-self.x, -self.y)

    def rotate90_ccw(self) -> UnitVector2:
        return UnitVector2._unchecked(-self.y, self.x)

    def rotate90_cw(self) -> UnitVector2:
        return UnitVector2._unchecked(self.y, -self.x)


# ============================================================
# 3D Types
# ============================================================
@dataclass(frozen=True, slots=True, eq=False)
class Point3:
    x: float
    y: float
    z: float

    def __post_init__(self):
        if CHECKED:
            check_finite("Point3", self.x, self.y, self.z)

    def __iter__(self):
        yield self.x; yield self.y; yield self.z

    def __add__(self, other: Vector3) -> Point3:
        if isinstance(other, Vector3):
            return Point3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Point3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented


@dataclass(frozen=True, slots=True, eq=False)
class Vector3:
    x: float
    y: float
    z: float

    def __post_init__(self):
        if CHECKED:
            check_finite(type(self).__name__, self.x, self.y, self.z)

    def __iter__(self):
        yield self.x; yield self.y; yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: Vector3) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, f: float) -> Vector3:
        if isinstance(f, (int, float)):
            return Vector3(self.x * f, self.y * f, self.z * f)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, f: float) -> Vector3:
        if is_negligible_divisor(f):
            _fail_divide("Vector3.__truediv__", self, f)
        return Vector3(self.x / f, self.y / f, self.z / f)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    @property
    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    @property
    def length(self) -> float:
        return math.sqrt(self.length_sq)


@dataclass(frozen=True, slots=True, eq=False)
class UnitVector3(Vector3):
    """A direction in space; length is one within UNIT_TOLERANCE."""

    def __post_init__(self):
        if CHECKED:
            check_finite("UnitVector3", self.x, self.y, self.z)
            if not is_one(self.x * self.x + self.y * self.y + self.z * self.z):
                raise UnitizingError(f"length of ({self.x}, {self.y}, {self.z}) is not one",
                                     op="UnitVector3", values=(self.x, self.y, self.z))

    @classmethod
    def create(cls, x: float, y: float, z: float) -> UnitVector3:
        from .geometry import unitize
        return unitize(Vector3(x, y, z))

    @classmethod
    def _unchecked(cls, x: float, y: float, z: float) -> UnitVector3:
        u = object.__new__(cls)
        object.__setattr__(u, "x", x)
        object.__setattr__(u, "y", y)
        object.__setattr__(u, "z", z)
        return u

    def __neg__(self) -> UnitVector3:
        return UnitVector3._unchecked(-self.x, -self.y, -self.z)


@dataclass(frozen=True, slots=True, eq=False)
class Quaternion:
    """Unit quaternion for 3D rotations (w is the scalar part)."""
    w: float
    x: float
    y: float
    z: float

    def __post_init__(self):
        if CHECKED:
            check_finite("Quaternion", self.w, self.x, self.y, self.z)
            if not is_one(self.w**2 + self.x**2 + self.y**2 + self.z**2):
                raise UnitizingError("w*w + x*x + y*y + z*z is not one", op="Quaternion",
                                     values=(self.w, self.x, self.y, self.z))

    @classmethod
    def from_axis_angle(cls, axis: UnitVector3, radians: float) -> Quaternion:
        """Rotation by *radians* counter-clockwise around *axis*."""
        check_finite("Quaternion.from_axis_angle", radians)
        s = math.sin(radians * 0.5)
        return cls(math.cos(radians * 0.5), axis.x * s, axis.y * s, axis.z * s)

    def inverse(self) -> Quaternion:
        return Quaternion(self.w, -self.x, -self.y, -self.z)


# ============================================================
# Segment
# ============================================================
@dataclass(frozen=True, slots=True, eq=False)
class Line2:
    """A finite line segment from *start* to *end*."""
    start: Point2
    end: Point2

    @property
    def vector(self) -> Vector2:
        return self.end - self.start

    @property
    def length_sq(self) -> float:
        return self.vector.length_sq

    @property
    def length(self) -> float:
        return self.vector.length

    def is_degenerate(self, tol_sq: float | None = None) -> bool:
        if tol_sq is None:
            return is_negligible_length_sq(self.length_sq)
        return is_negligible_length_sq(self.length_sq, tol_sq)

    def evaluate_at(self, t: float) -> Point2:
        """Point at parameter t (0 = start, 1 = end)."""
        return Point2(self.start.x + t * (self.end.x - self.start.x),
                      self.start.y + t * (self.end.y - self.start.y))

    def reversed(self) -> Line2:
        return Line2(self.end, self.start)
