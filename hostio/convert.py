"""Host point arrays <-> core Polyline/Loop values.

Host geometry arrives as anything numpy can turn into an (N, 2) or (N, 3)
float array; z is dropped after checking the points lie in one plane.
"""
import logging

import numpy as np

from geom.constants import TOO_SMALL
from geom.errors import GeometryError, NanInfinityError
from polyline.constants import DEFAULT_MIN_SEGMENT_LENGTH, DEFAULT_SNAP_TOLERANCE
from polyline.model import Polyline, build

logger = logging.getLogger(__name__)


def as_point_array(host_points, planar_tol: float = TOO_SMALL) -> np.ndarray:
    """Validate host points and return them as an (N, 2) float array."""
    arr = np.asarray(host_points, dtype=float)
    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise GeometryError(f"expected an (N, 2) or (N, 3) array, got shape {arr.shape}",
                            op="to_core", values=(arr.shape,))
    finite = np.isfinite(arr).all(axis=1)
    if not finite.all():
        row = int(np.flatnonzero(~finite)[0])
        raise NanInfinityError(f"NaN or Infinity in row {row}: {arr[row].tolist()}",
                               op="to_core", values=tuple(arr[row].tolist()))
    if arr.shape[1] == 3:
        z = arr[:, 2]
        if z.max() - z.min() > planar_tol:
            raise GeometryError(f"points are not planar: z spans {z.min()} .. {z.max()}",
                                op="to_core", values=(float(z.min()), float(z.max())))
        arr = arr[:, :2]
    return arr


def to_core(host_points, closed: bool = False,
            min_segment_length: float = DEFAULT_MIN_SEGMENT_LENGTH,
            snap_tolerance: float = DEFAULT_SNAP_TOLERANCE, *,
            keep_collinear: bool = False) -> Polyline:
    """Build a Polyline, or a Loop when *closed*, from host points.

    A closed host ring that repeats its first point is accepted; the
    repeated point is dropped when the loop is closed.
    """
    arr = as_point_array(host_points)
    if snap_tolerance >= min_segment_length:
        logger.debug("snap_tolerance %g is not below min_segment_length %g",
                     snap_tolerance, min_segment_length)
    return build([tuple(row) for row in arr.tolist()], min_segment_length, snap_tolerance,
                 closed=closed, keep_collinear=keep_collinear)


def from_core(polyline: Polyline, *, repeat_first: bool = False) -> np.ndarray:
    """Vertices as an (N, 2) array; *repeat_first* appends the start of a loop."""
    arr = np.array([(p.x, p.y) for p in polyline.points], dtype=float).reshape(-1, 2)
    if repeat_first and polyline.closed and len(arr):
        arr = np.vstack([arr, arr[:1]])
    return arr
