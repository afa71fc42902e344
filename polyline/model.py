"""Polyline and Loop value types, vertex snapping/filtering, and shape queries.

``build`` is the only way raw host points should enter the model: it merges
snapped vertices, absorbs short segments and (by default) drops redundant
collinear vertices. Everything downstream relies on its invariant that no two
consecutive vertices lie within the snap tolerance.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import ClassVar

from geom.constants import CHECKED, TOO_SMALL
from geom.errors import GeometryError, TooFewPointsError
from geom.geometry import (
    closest_point_on_segment, distance, distance_sq, is_equal, midpoint, signed_angle,
)
from geom.intersect import segments_touch
from geom.tolerance import check_finite, is_finite
from geom.types import BBox, Line2, Point2
from .constants import DEFAULT_MIN_SEGMENT_LENGTH, DEFAULT_SNAP_TOLERANCE, MIN_LOOP_POINTS

logger = logging.getLogger(__name__)


# ============================================================
# Segment View
# ============================================================
class SegmentView(Sequence[Line2]):
    """Lazy, restartable sequence of a polyline's segments.

    Segments are created on access; loops include the closing segment.
    """
    __slots__ = ("_points", "_closed")

    def __init__(self, points: tuple[Point2, ...], closed: bool):
        self._points = points
        self._closed = closed

    def __len__(self) -> int:
        n = len(self._points)
        if n < 2:
            return 0
        return n if self._closed else n - 1

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [self[k] for k in range(*i.indices(len(self)))]
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"segment index {i} out of range for {n} segments")
        pts = self._points
        return Line2(pts[i], pts[(i + 1) % len(pts)])

    def __repr__(self):
        return f"SegmentView({len(self)} segments, closed={self._closed})"


# ============================================================
# Polyline / Loop
# ============================================================
def _check_tolerances(op: str, min_segment_length: float, snap_tolerance: float):
    check_finite(op, min_segment_length, snap_tolerance)
    if min_segment_length < 0.0 or snap_tolerance < 0.0:
        raise GeometryError(
            f"tolerances must not be negative: min_segment_length={min_segment_length}, "
            f"snap_tolerance={snap_tolerance}",
            op=op, values=(min_segment_length, snap_tolerance))


@dataclass(frozen=True, slots=True, eq=False)
class Polyline:
    """Open, immutable sequence of vertices plus the tolerances it was built with."""
    points: tuple[Point2, ...]
    min_segment_length: float = DEFAULT_MIN_SEGMENT_LENGTH
    snap_tolerance: float = DEFAULT_SNAP_TOLERANCE

    closed: ClassVar[bool] = False

    def __post_init__(self):
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))
        name = type(self).__name__
        _check_tolerances(name, self.min_segment_length, self.snap_tolerance)
        if CHECKED:
            _validate_vertices(name, self.points, self.snap_tolerance, self.closed)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, i) -> Point2:
        return self.points[i]

    @property
    def segments(self) -> SegmentView:
        return SegmentView(self.points, self.closed)

    @property
    def start(self) -> Point2:
        return self.points[0]

    @property
    def end(self) -> Point2:
        """Last vertex (for a loop, the one before the implicit closing segment)."""
        return self.points[-1]


@dataclass(frozen=True, slots=True, eq=False)
class Loop(Polyline):
    """Closed polyline with at least three vertices; the start is not repeated."""

    closed: ClassVar[bool] = True

    def __post_init__(self):
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))
        if len(self.points) < MIN_LOOP_POINTS:
            raise TooFewPointsError(f"a loop needs {MIN_LOOP_POINTS} vertices, got {len(self.points)}",
                                    op="Loop", values=self.points)
        Polyline.__post_init__(self)


def _validate_vertices(op: str, points: tuple, snap_tolerance: float, closed: bool):
    for p in points:
        if not isinstance(p, Point2):
            raise GeometryError(f"vertex {p!r} is not a Point2", op=op, values=(p,))
    snap_sq = snap_tolerance * snap_tolerance
    n = len(points)
    count = n if closed else n - 1
    for i in range(count):
        a = points[i]; b = points[(i + 1) % n]
        if distance_sq(a, b) <= snap_sq:
            raise GeometryError(f"vertices {i} and {(i + 1) % n} are within snap tolerance "
                                f"{snap_tolerance}: {a}, {b}", op=op, values=(a, b))


# ============================================================
# Construction Filters
# ============================================================
def _as_point(p) -> Point2:
    if isinstance(p, Point2):
        check_finite("build", p.x, p.y)
        return p
    x, y = float(p[0]), float(p[1])
    check_finite("build", x, y)
    return Point2(x, y)

def _too_close(a: Point2, b: Point2, min_sq: float, snap_sq: float) -> bool:
    d_sq = distance_sq(a, b)
    return d_sq < min_sq or d_sq <= snap_sq

def _merge_snapped(pts: list[Point2], snap_sq: float, keep_last: bool) -> list[Point2]:
    """Merge runs of consecutive points within snap tolerance (first of a run wins)."""
    if not pts:
        return []
    out = [pts[0]]
    for p in pts[1:]:
        if distance_sq(out[-1], p) <= snap_sq:
            logger.debug("merged %s into %s", p, out[-1])
            continue
        out.append(p)
    # Open polylines keep their exact end point
    if keep_last and len(out) > 1 and out[-1] is not pts[-1]:
        out[-1] = pts[-1]
    return out

def _absorb_short_open(pts: list[Point2], min_sq: float, snap_sq: float) -> list[Point2]:
    """Absorb short segments; interior ones collapse to their midpoint, end ones onto the end."""
    i = 0
    while len(pts) >= 2 and i < len(pts) - 1:
        if not _too_close(pts[i], pts[i + 1], min_sq, snap_sq):
            i += 1
            continue
        last = len(pts) - 1
        logger.debug("absorbed short segment %d: %s -> %s", i, pts[i], pts[i + 1])
        if i == 0:
            del pts[1]
        elif i + 1 == last:
            del pts[i]
        else:
            pts[i] = midpoint(pts[i], pts[i + 1])
            del pts[i + 1]
        i = max(i - 1, 0)
    return pts

def _absorb_short_cyclic(pts: list[Point2], min_sq: float, snap_sq: float) -> list[Point2]:
    changed = True
    while changed and len(pts) >= MIN_LOOP_POINTS:
        changed = False
        n = len(pts)
        for i in range(n):
            j = (i + 1) % n
            if _too_close(pts[i], pts[j], min_sq, snap_sq):
                logger.debug("absorbed short loop segment %d: %s -> %s", i, pts[i], pts[j])
                pts[i] = midpoint(pts[i], pts[j])
                del pts[j]
                changed = True
                break
    return pts

def _is_redundant_vertex(a: Point2, b: Point2, c: Point2, snap_sq: float) -> bool:
    """b continues forward from a to c and lies within snap of the chord a-c."""
    ab = b - a; ac = c - a
    if ab.dot(c - b) <= 0.0:
        return False  # U-turn tip
    h = ac.cross(ab)
    return h * h <= snap_sq * ac.length_sq

def _drop_collinear(pts: list[Point2], snap_sq: float, closed: bool) -> list[Point2]:
    changed = True
    while changed:
        changed = False
        n = len(pts)
        indices = range(n) if closed and n >= MIN_LOOP_POINTS else range(1, n - 1)
        for i in indices:
            if _is_redundant_vertex(pts[i - 1], pts[i], pts[(i + 1) % n], snap_sq):
                logger.debug("dropped collinear vertex %d at %s", i, pts[i])
                del pts[i]
                changed = True
                break
    return pts

def _close(pts: list[Point2], min_segment_length: float, snap_tolerance: float,
           keep_collinear: bool) -> Loop:
    min_sq = min_segment_length * min_segment_length
    snap_sq = snap_tolerance * snap_tolerance
    while len(pts) > 1 and _too_close(pts[-1], pts[0], min_sq, snap_sq):
        logger.debug("dropped closing vertex %s (start %s)", pts[-1], pts[0])
        pts.pop()
    pts = _absorb_short_cyclic(pts, min_sq, snap_sq)
    if not keep_collinear:
        pts = _drop_collinear(pts, snap_sq, closed=True)
    if len(pts) < MIN_LOOP_POINTS:
        raise TooFewPointsError(f"only {len(pts)} vertices left after closing",
                                op="close_loop", values=tuple(pts))
    return Loop(tuple(pts), min_segment_length, snap_tolerance)


def build(points: Iterable, min_segment_length: float = DEFAULT_MIN_SEGMENT_LENGTH,
          snap_tolerance: float = DEFAULT_SNAP_TOLERANCE, *,
          closed: bool = False, keep_collinear: bool = False) -> Polyline:
    """Build a Polyline (or a Loop with ``closed=True``) from raw points.

    Points may be Point2 values or (x, y) pairs. Consecutive points within
    *snap_tolerance* are merged, segments shorter than *min_segment_length*
    are absorbed into their neighbours and, unless *keep_collinear*, vertices
    that do not change the shape by more than *snap_tolerance* are dropped.

    Raises NanInfinityError for non-finite input, GeometryError for negative
    tolerances and TooFewPointsError when a loop collapses below 3 vertices.
    """
    _check_tolerances("build", min_segment_length, snap_tolerance)
    pts = [_as_point(p) for p in points]
    snap_sq = snap_tolerance * snap_tolerance
    pts = _merge_snapped(pts, snap_sq, keep_last=not closed)
    if closed:
        return _close(pts, min_segment_length, snap_tolerance, keep_collinear)
    pts = _absorb_short_open(pts, min_segment_length * min_segment_length, snap_sq)
    if not keep_collinear:
        pts = _drop_collinear(pts, snap_sq, closed=False)
    return Polyline(tuple(pts), min_segment_length, snap_tolerance)


def close_loop(polyline: Polyline, *, keep_collinear: bool = False) -> Loop:
    """Close *polyline* into a Loop.

    A last vertex within snap tolerance or minimum segment length of the start
    is dropped; fails with TooFewPointsError if fewer than 3 vertices remain.
    """
    return _close(list(polyline.points), polyline.min_segment_length,
                  polyline.snap_tolerance, keep_collinear)


# ============================================================
# Turn Angles
# ============================================================
def turn_angle(polyline: Polyline, i: int) -> float:
    """Signed turn at vertex i in [-pi, pi]; positive turns left (CCW)."""
    pts = polyline.points
    n = len(pts)
    if polyline.closed:
        i %= n
        prev = pts[i - 1]; nxt = pts[(i + 1) % n]
    else:
        if not 1 <= i <= n - 2:
            raise GeometryError(f"vertex {i} of an open polyline with {n} points has no turn",
                                op="turn_angle", values=(i,))
        prev = pts[i - 1]; nxt = pts[i + 1]
    return signed_angle(pts[i] - prev, nxt - pts[i])

def joint_indices(polyline: Polyline) -> range:
    """Indices of the vertices where two segments meet."""
    n = len(polyline.points)
    if polyline.closed:
        return range(n)
    return range(1, max(n - 1, 1))

def turn_angles(polyline: Polyline) -> list[float]:
    return [turn_angle(polyline, i) for i in joint_indices(polyline)]


# ============================================================
# Measurements
# ============================================================
def signed_area(polyline: Polyline) -> float:
    """Shoelace area of the closed vertex ring; positive for CCW winding."""
    pts = polyline.points
    n = len(pts); a = 0.0
    for i in range(n):
        j = (i + 1) % n; a += pts[i].x * pts[j].y - pts[j].x * pts[i].y
    return a / 2

def area(polyline: Polyline) -> float:
    return abs(signed_area(polyline))

def is_ccw(polyline: Polyline) -> bool:
    return signed_area(polyline) > 0.0

def length(polyline: Polyline) -> float:
    """Total length, including the closing segment of a loop."""
    return sum(seg.length for seg in polyline.segments)

def bounding_box(polyline: Polyline) -> BBox:
    if not polyline.points:
        raise TooFewPointsError("empty polyline has no bounding box", op="bounding_box")
    xs = [p.x for p in polyline.points]; ys = [p.y for p in polyline.points]
    return BBox(min(xs), min(ys), max(xs), max(ys))


# ============================================================
# Derived Shapes and Queries
# ============================================================
def reversed_polyline(polyline: Polyline) -> Polyline:
    """Same vertices in opposite order; a loop keeps its start vertex."""
    pts = polyline.points
    if polyline.closed:
        pts = pts[:1] + pts[:0:-1]
    else:
        pts = pts[::-1]
    return type(polyline)(pts, polyline.min_segment_length, polyline.snap_tolerance)

def contains_point(loop: Loop, p: Point2) -> bool:
    """Even-odd test; points on the boundary may report either way."""
    if not loop.closed:
        raise GeometryError("containment needs a closed loop", op="contains_point", values=(p,))
    pts = loop.points
    inside = False
    for i in range(len(pts)):
        a = pts[i]; b = pts[(i + 1) % len(pts)]
        if (a.y <= p.y < b.y) or (b.y <= p.y < a.y):
            t = (p.y - a.y) / (b.y - a.y)
            if a.x + t * (b.x - a.x) > p.x:
                inside = not inside
    return inside

def closest_point(polyline: Polyline, p: Point2) -> Point2:
    """Closest point to p on any segment (the single vertex of a 1-point polyline)."""
    if not polyline.points:
        raise TooFewPointsError("empty polyline", op="closest_point", values=(p,))
    if len(polyline.points) == 1:
        return polyline.points[0]
    return min((closest_point_on_segment(p, seg) for seg in polyline.segments),
               key=lambda q: distance_sq(p, q))

def self_intersections(polyline: Polyline, tol: float = TOO_SMALL) -> list[tuple[int, int]]:
    """Index pairs of non-adjacent segments that cross or touch within *tol*."""
    segs = polyline.segments
    n = len(segs)
    hits = []
    for i in range(n):
        for j in range(i + 2, n):
            if polyline.closed and i == 0 and j == n - 1:
                continue  # adjacent through the closing vertex
            if segments_touch(segs[i], segs[j], tol):
                hits.append((i, j))
    return hits

def is_simple(polyline: Polyline, tol: float = TOO_SMALL) -> bool:
    return not self_intersections(polyline, tol)

def same_shape(a: Polyline, b: Polyline, tol: float = TOO_SMALL) -> bool:
    """Tolerance-aware equality; loops may start at different vertices."""
    if a.closed != b.closed or len(a.points) != len(b.points):
        return False
    pa, pb = a.points, b.points
    if not a.closed:
        return all(is_equal(p, q, tol) for p, q in zip(pa, pb))
    n = len(pa)
    for shift in range(n):
        if all(is_equal(pa[k], pb[(k + shift) % n], tol) for k in range(n)):
            return True
    return False

def has_finite_points(polyline: Polyline) -> bool:
    return all(is_finite(p.x, p.y) for p in polyline.points)

def max_vertex_deviation(a: Polyline, b: Polyline) -> float:
    """Largest distance from a vertex of *a* to the polyline *b*."""
    return max(distance(p, closest_point(b, p)) for p in a.points)
