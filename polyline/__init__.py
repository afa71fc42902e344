"""Polyline and Loop model: construction filters, segment views, and shape queries."""

from .constants import DEFAULT_MIN_SEGMENT_LENGTH, DEFAULT_SNAP_TOLERANCE, MIN_LOOP_POINTS
from .model import (
    SegmentView, Polyline, Loop,
    build, close_loop,
    turn_angle, turn_angles, joint_indices,
    signed_area, area, is_ccw, length, bounding_box,
    reversed_polyline, contains_point, closest_point,
    self_intersections, is_simple, same_shape, has_finite_points, max_vertex_deviation,
)
