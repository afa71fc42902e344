"""Line/line intersection as an explicit result variant (never a sentinel or NaN)."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import COS_0_25, TOO_SMALL
from .geometry import distance_sq_to_segment
from .tolerance import is_near_parallel_sq, is_negligible_length_sq
from .types import Point2, Vector2, Line2


# ============================================================
# Result Variant
# ============================================================
@dataclass(frozen=True, slots=True, eq=False)
class IntersectPoint:
    point: Point2


@dataclass(frozen=True, slots=True)
class Parallel:
    """Distinct parallel lines."""


@dataclass(frozen=True, slots=True)
class Coincident:
    """Parallel lines lying on top of each other within tolerance."""


@dataclass(frozen=True, slots=True)
class NoIntersection:
    """Degenerate input (zero-length direction or non-finite solve)."""
    reason: str = ""


LineIntersection = IntersectPoint | Parallel | Coincident | NoIntersection


# ============================================================
# Intersection
# ============================================================
def intersect_lines(p1: Point2, d1: Vector2, p2: Point2, d2: Vector2,
                    parallel_cos: float = COS_0_25,
                    coincident_tol: float = TOO_SMALL) -> LineIntersection:
    """Intersection of the infinite lines (p1 + t*d1) and (p2 + s*d2).

    Lines within the angle whose cosine is *parallel_cos* are reported as
    Parallel, or Coincident when p2 lies within *coincident_tol* of line 1.
    """
    len_sq1 = d1.length_sq; len_sq2 = d2.length_sq
    if is_negligible_length_sq(len_sq1) or is_negligible_length_sq(len_sq2):
        return NoIntersection("zero-length direction")
    w = p2 - p1
    if is_near_parallel_sq(d1.dot(d2), len_sq1, len_sq2, parallel_cos):
        # distance from p2 to line 1, compared squared
        c = d1.cross(w)
        if c * c <= coincident_tol * coincident_tol * len_sq1:
            return Coincident()
        return Parallel()
    det = d1.cross(d2)
    t = w.cross(d2) / det
    x = p1.x + t * d1.x; y = p1.y + t * d1.y
    if not (math.isfinite(x) and math.isfinite(y)):
        return NoIntersection(f"non-finite solve, det={det:.2e}")
    return IntersectPoint(Point2(x, y))


def _orient(a: Point2, b: Point2, c: Point2) -> float:
    return (b - a).cross(c - a)


def segments_touch(a: Line2, b: Line2, tol: float = TOO_SMALL) -> bool:
    """True if the two segments cross or come within *tol* of each other."""
    tol_sq = tol * tol
    if (distance_sq_to_segment(b.start, a) <= tol_sq or distance_sq_to_segment(b.end, a) <= tol_sq
            or distance_sq_to_segment(a.start, b) <= tol_sq or distance_sq_to_segment(a.end, b) <= tol_sq):
        return True
    o1 = _orient(a.start, a.end, b.start); o2 = _orient(a.start, a.end, b.end)
    o3 = _orient(b.start, b.end, a.start); o4 = _orient(b.start, b.end, a.end)
    return (o1 > 0) != (o2 > 0) and (o3 > 0) != (o4 > 0)
