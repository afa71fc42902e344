"""Offset a Polyline or Loop by a signed distance, resolving degenerate joints by policy.

Sign convention: for a Loop a positive distance offsets outward whatever
the winding; for an open Polyline a positive distance offsets to the left
of the direction of travel.

Each segment is moved along its unit left normal. At every joint the two
moved segments are joined according to the angle between their normals:

* near 180 degrees (U-turn): the ``UTurnBehavior`` policy,
* near 0 degrees: a single mitre vertex, or the ``ParallelHandling`` policy
  when the two segments are offset by different distances,
* otherwise: the intersection of the two offset lines.

The resulting vertices are rebuilt with the input's own tolerances, so
negligible segments created by the offset are removed again.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import NamedTuple, assert_never

from geom.constants import COS_2_5, COS_175, COS_179
from geom.errors import GeometryError, NanInfinityError, TooFewPointsError, TooSmallError
from geom.geometry import left_normal, lerp, offset_point, project_onto_line, unitize
from geom.intersect import Coincident, IntersectPoint, NoIntersection, Parallel, intersect_lines
from geom.tolerance import (
    check_finite, is_finite, is_near_equal, is_near_reversal_cosine,
    is_near_same_direction_cosine, is_near_zero, is_negligible_length_sq,
)
from geom.types import Point2, UnitVector2
from polyline.model import Polyline, build, is_ccw, joint_indices
from .policies import (
    OffsetErr, OffsetError, OffsetErrorKind, OffsetOk, OffsetResult,
    ParallelHandling, UTurnBehavior,
)

logger = logging.getLogger(__name__)


class Joint(NamedTuple):
    """The input vertex where an incoming and an outgoing segment meet."""
    vertex: int
    point: Point2
    n_prev: UnitVector2     # left normal of the incoming segment
    n_next: UnitVector2     # left normal of the outgoing segment
    d_prev: float           # left-offset distance of the incoming segment
    d_next: float
    len_prev: float
    len_next: float


class _Settings(NamedTuple):
    u_turn: UTurnBehavior
    parallel: ParallelHandling
    u_turn_cos: float
    parallel_cos: float
    threshold_cos: float


def _fail(kind: OffsetErrorKind, msg: str, j: Joint | None = None) -> OffsetError:
    if j is None:
        return OffsetError(kind, msg)
    return OffsetError(kind, msg, j.vertex, j.point)

def _degrees(cos: float) -> float:
    return math.degrees(math.acos(max(-1.0, min(1.0, cos))))


# ============================================================
# Corner Construction
# ============================================================
def _corner(pt: Point2, n1: UnitVector2, d1: float, n2: UnitVector2, d2: float) -> Point2:
    """Intersection of the lines through pt + n1*d1 and pt + n2*d2 with normals n1 and n2.

    Callers keep n1 and n2 away from parallel.
    """
    c = n1.dot(n2)
    if is_near_equal(d1, d2):
        return pt + (n1 + n2) * (d1 / (1.0 + c))
    den = 1.0 - c * c
    return pt + n1 * ((d1 - d2 * c) / den) + n2 * ((d2 - d1 * c) / den)

def _mitre(j: Joint, s: _Settings) -> list[Point2] | OffsetError:
    a = offset_point(j.point, j.n_prev, j.d_prev)
    b = offset_point(j.point, j.n_next, j.d_next)
    result = intersect_lines(a, j.n_prev.rotate90_cw(), b, j.n_next.rotate90_cw(),
                             parallel_cos=s.parallel_cos)
    match result:
        case IntersectPoint(point=p):
            return [p]
        case Parallel() | Coincident():
            if is_near_equal(j.d_prev, j.d_next):
                return [_corner(j.point, j.n_prev, j.d_prev, j.n_next, j.d_next)]
            logger.debug("joint %d: offset lines parallel, using %s", j.vertex, s.parallel.value)
            return _parallel(j, s)
        case NoIntersection(reason=reason):
            return _fail(OffsetErrorKind.NO_INTERSECTION, f"offset lines do not intersect: {reason}", j)
        case _:
            assert_never(result)

def _chamfer(j: Joint) -> list[Point2]:
    """Two vertices on a chamfer across the joint, offset by the mean distance."""
    d_mid = (j.d_prev + j.d_next) * 0.5
    bisector = j.n_prev + j.n_next
    if is_negligible_length_sq(bisector.length_sq):
        # exact reversal: cap beyond the tip
        n_mid = j.n_prev.rotate90_cw()
        if d_mid < 0.0:
            n_mid = -n_mid
    else:
        n_mid = unitize(bisector)
    return [_corner(j.point, j.n_prev, j.d_prev, n_mid, d_mid),
            _corner(j.point, n_mid, d_mid, j.n_next, j.d_next)]


# ============================================================
# Policies
# ============================================================
def _u_turn(j: Joint, cos: float, s: _Settings) -> list[Point2] | OffsetError:
    match s.u_turn:
        case UTurnBehavior.FAIL:
            return _fail(OffsetErrorKind.DEGENERATE_JOINT,
                         f"joint turns {_degrees(cos):.4f} degrees, "
                         f"more than the u-turn limit of {_degrees(s.u_turn_cos):.4f}", j)
        case UTurnBehavior.CHAMFER:
            logger.debug("joint %d: u-turn chamfered", j.vertex)
            return _chamfer(j)
        case UTurnBehavior.SKIP:
            logger.debug("joint %d: u-turn skipped", j.vertex)
            return []
        case UTurnBehavior.THRESHOLD:
            if cos > s.threshold_cos:
                return _mitre(j, s)
            logger.debug("joint %d: u-turn beyond threshold, chamfered", j.vertex)
            return _chamfer(j)
        case _:
            assert_never(s.u_turn)

def _parallel(j: Joint, s: _Settings) -> list[Point2] | OffsetError:
    a = offset_point(j.point, j.n_prev, j.d_prev)
    b = offset_point(j.point, j.n_next, j.d_next)
    match s.parallel:
        case ParallelHandling.FAIL:
            return _fail(OffsetErrorKind.PARALLEL_JOINT,
                         f"parallel segments with different distances {j.d_prev} and {j.d_next}", j)
        case ParallelHandling.SKIP:
            logger.debug("joint %d: parallel joint skipped", j.vertex)
            return []
        case ParallelHandling.PROPORTIONAL:
            t = j.len_prev / (j.len_prev + j.len_next)
            return [lerp(a, b, t)]
        case ParallelHandling.PROJECT:
            return [project_onto_line(a, b, j.n_next.rotate90_cw())]
        case _:
            assert_never(s.parallel)

def _resolve_joint(j: Joint, s: _Settings) -> list[Point2] | OffsetError:
    """Offset vertices for one joint (zero, one or two), or the reason it failed."""
    cos = j.n_prev.dot(j.n_next)
    if is_near_reversal_cosine(cos, s.u_turn_cos):
        return _u_turn(j, cos, s)
    if is_near_same_direction_cosine(cos, s.parallel_cos):
        if is_near_equal(j.d_prev, j.d_next):
            return [_corner(j.point, j.n_prev, j.d_prev, j.n_next, j.d_next)]
        return _parallel(j, s)
    return _mitre(j, s)


# ============================================================
# Offset
# ============================================================
def _rebuild(polyline: Polyline, pts: list[Point2]) -> OffsetResult:
    try:
        result = build(pts, polyline.min_segment_length, polyline.snap_tolerance,
                       closed=polyline.closed, keep_collinear=True)
    except TooFewPointsError as e:
        return OffsetErr(_fail(OffsetErrorKind.COLLAPSED, str(e)))
    if len(result.points) < 2:
        return OffsetErr(_fail(OffsetErrorKind.COLLAPSED,
                               f"only {len(result.points)} vertex left after rebuilding"))
    return OffsetOk(result)

def _offset(polyline: Polyline, distances: list[float], s: _Settings) -> OffsetResult:
    pts = polyline.points
    if len(pts) < 2:
        return OffsetErr(_fail(OffsetErrorKind.TOO_FEW_POINTS,
                               f"need at least 2 vertices, got {len(pts)}"))
    if all(is_near_zero(d) for d in distances):
        return _rebuild(polyline, list(pts))

    # Left normals point inward on a CCW loop
    if polyline.closed and is_ccw(polyline):
        distances = [-d for d in distances]

    segs = polyline.segments
    try:
        normals = [left_normal(seg.start, seg.end) for seg in segs]
    except TooSmallError as e:
        return OffsetErr(_fail(OffsetErrorKind.DEGENERATE_JOINT, str(e)))
    lengths = [seg.length for seg in segs]

    out: list[Point2] = []
    try:
        if not polyline.closed:
            out.append(offset_point(pts[0], normals[0], distances[0]))
        for i in joint_indices(polyline):
            j = Joint(i, pts[i], normals[i - 1], normals[i], distances[i - 1], distances[i],
                      lengths[i - 1], lengths[i])
            res = _resolve_joint(j, s)
            if isinstance(res, OffsetError):
                logger.debug("offset failed: %s", res)
                return OffsetErr(res)
            out.extend(res)
        if not polyline.closed:
            out.append(offset_point(pts[-1], normals[-1], distances[-1]))
    except NanInfinityError as e:
        return OffsetErr(_fail(OffsetErrorKind.NON_FINITE, str(e)))

    if not all(is_finite(p.x, p.y) for p in out):
        return OffsetErr(_fail(OffsetErrorKind.NON_FINITE, "offset produced NaN or Infinity"))
    logger.debug("offset %d vertices -> %d before rebuild", len(pts), len(out))
    return _rebuild(polyline, out)


def offset(polyline: Polyline, distance: float,
           u_turn: UTurnBehavior = UTurnBehavior.FAIL,
           parallel: ParallelHandling = ParallelHandling.FAIL, *,
           u_turn_cos: float = COS_175, parallel_cos: float = COS_2_5,
           threshold_cos: float = COS_179) -> OffsetResult:
    """Offset every segment by the same signed *distance*.

    Joints whose normals are closer than *u_turn_cos* to opposite go to the
    *u_turn* policy; THRESHOLD mitres them while cos > *threshold_cos*.
    Raises NanInfinityError for a non-finite distance; every other failure
    is returned as OffsetErr.
    """
    check_finite("offset", distance)
    s = _Settings(u_turn, parallel, u_turn_cos, parallel_cos, threshold_cos)
    return _offset(polyline, [float(distance)] * len(polyline.segments), s)


def offset_variable(polyline: Polyline, distances: Iterable[float],
                    u_turn: UTurnBehavior = UTurnBehavior.FAIL,
                    parallel: ParallelHandling = ParallelHandling.FAIL, *,
                    u_turn_cos: float = COS_175, parallel_cos: float = COS_2_5,
                    threshold_cos: float = COS_179) -> OffsetResult:
    """Offset each segment by its own signed distance (one per segment, in order).

    A loop takes one distance per vertex; the last one is for the closing segment.
    """
    distances = [float(d) for d in distances]
    check_finite("offset_variable", *distances)
    expected = len(polyline.segments)
    if len(polyline.points) >= 2 and len(distances) != expected:
        raise GeometryError(f"expected {expected} distances, got {len(distances)}",
                            op="offset_variable", values=tuple(distances))
    s = _Settings(u_turn, parallel, u_turn_cos, parallel_cos, threshold_cos)
    return _offset(polyline, distances, s)
