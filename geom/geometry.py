"""Pure geometry functions on the value types: distances, normals, projections, rotations."""
import math

from .constants import TOO_SMALL, ZERO_LENGTH
from .errors import TooSmallError
from .tolerance import check_finite, is_negligible_length, is_negligible_length_sq
from .types import (
    Point2, Vector2, UnitVector2, Point3, Vector3, UnitVector3, Quaternion, Line2,
)

# ============================================================
# Distances and Equality
# ============================================================
def distance_sq(a, b) -> float:
    """Squared distance between two 2D or 3D points."""
    return (a - b).length_sq

def distance(a, b) -> float:
    return math.sqrt(distance_sq(a, b))

def is_equal(a, b, tol: float = TOO_SMALL) -> bool:
    """Tolerance-aware equality of two points or two vectors of the same dimension.

    Each coordinate must differ by at most *tol*.
    """
    return all(abs(u - v) <= tol for u, v in zip(a, b, strict=True))

def midpoint(a: Point2, b: Point2) -> Point2:
    return Point2((a.x + b.x) * 0.5, (a.y + b.y) * 0.5)

def lerp(a: Point2, b: Point2, t: float) -> Point2:
    """Linear interpolation between two points."""
    return Point2(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))


# ============================================================
# Directions and Normals
# ============================================================
def unitize(v):
    """Unit vector in the direction of *v* (2D or 3D).

    Raises TooSmallError if *v* is too short to define a direction.
    """
    length = v.length
    if is_negligible_length(length, ZERO_LENGTH):
        raise TooSmallError(f"cannot unitize {v}, length {length}", op="unitize", values=(v,))
    if isinstance(v, Vector3):
        return UnitVector3._unchecked(v.x / length, v.y / length, v.z / length)
    return UnitVector2._unchecked(v.x / length, v.y / length)

def direction(a: Point2, b: Point2) -> UnitVector2:
    """Unit direction from a to b; raises TooSmallError when a and b are too close."""
    v = b - a
    if is_negligible_length_sq(v.length_sq):
        raise TooSmallError(f"{a} and {b} are too close to get a direction",
                            op="direction", values=(a, b))
    return unitize(v)

def left_normal(a: Point2, b: Point2) -> UnitVector2:
    """Unit normal vector to the left of the direction a -> b (CCW perpendicular)."""
    return direction(a, b).rotate90_ccw()

def offset_point(p: Point2, n: Vector2, d: float) -> Point2:
    """Offset point p by distance d along unit direction n."""
    return Point2(p.x + d * n.x, p.y + d * n.y)


# ============================================================
# Angles and Rotations
# ============================================================
def signed_angle(a: Vector2, b: Vector2) -> float:
    """Signed angle from a to b in [-pi, pi]; positive is counter-clockwise."""
    return math.atan2(a.cross(b), a.dot(b))

def angle_between(a, b) -> float:
    """Unsigned angle between two 2D or 3D vectors in [0, pi]."""
    if isinstance(a, Vector3):
        return math.atan2(a.cross(b).length, a.dot(b))
    return abs(signed_angle(a, b))

def rotate(v: Vector2, radians: float) -> Vector2:
    """Rotate a 2D vector counter-clockwise; unit vectors stay unit vectors."""
    check_finite("rotate", radians)
    c = math.cos(radians); s = math.sin(radians)
    x = v.x * c - v.y * s; y = v.x * s + v.y * c
    if isinstance(v, UnitVector2):
        return UnitVector2._unchecked(x, y)
    return Vector2(x, y)

def rotate_by_quaternion(v: Vector3, q: Quaternion) -> Vector3:
    """Rotate a 3D vector by a unit quaternion; unit vectors stay unit vectors."""
    # v' = v + 2w (q x v) + 2 q x (q x v)
    qv = Vector3(q.x, q.y, q.z)
    t = qv.cross(v) * 2.0
    r = v + t * q.w + qv.cross(t)
    if isinstance(v, UnitVector3):
        return UnitVector3._unchecked(r.x, r.y, r.z)
    return r

def rotate_point(p: Point2, center: Point2, radians: float) -> Point2:
    return center + rotate(p - center, radians)


# ============================================================
# Projections
# ============================================================
def closest_parameter(line: Line2, p: Point2) -> float:
    """Parameter t of the point on the infinite line closest to p (0 = start, 1 = end)."""
    v = line.vector
    len_sq = v.length_sq
    if is_negligible_length_sq(len_sq):
        raise TooSmallError(f"line {line} is degenerate", op="closest_parameter", values=(line,))
    return (p - line.start).dot(v) / len_sq

def project_onto_line(p: Point2, origin: Point2, dirn: Vector2) -> Point2:
    """Foot of the perpendicular from p onto the line origin + t*dirn."""
    len_sq = dirn.length_sq
    if is_negligible_length_sq(len_sq):
        raise TooSmallError(f"direction {dirn} is too short", op="project_onto_line", values=(dirn,))
    t = (p - origin).dot(dirn) / len_sq
    return Point2(origin.x + t * dirn.x, origin.y + t * dirn.y)

def closest_point_on_segment(p: Point2, line: Line2) -> Point2:
    if line.is_degenerate():
        return line.start
    t = min(1.0, max(0.0, closest_parameter(line, p)))
    return line.evaluate_at(t)

def distance_sq_to_segment(p: Point2, line: Line2) -> float:
    return distance_sq(p, closest_point_on_segment(p, line))


def to_point3(p: Point2, z: float = 0.0) -> Point3:
    return Point3(p.x, p.y, z)
