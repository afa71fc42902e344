"""Tolerance kernel, geometric value types, and derived geometry functions."""

from .constants import (
    TOO_SMALL, TOO_SMALL_SQ, ZERO_LENGTH, UNIT_TOLERANCE,
    COS_0_01, COS_0_25, COS_1, COS_2_5, COS_45, COS_90,
    COS_170, COS_175, COS_177_5, COS_179, CHECKED,
)
from .errors import (
    GeometryError, DivideByZeroError, TooSmallError, UnitizingError,
    NanInfinityError, TooFewPointsError, OffsetFailure,
)
from .tolerance import (
    is_negligible_length, is_negligible_length_sq, is_negligible_divisor,
    is_near_zero, is_near_equal, is_one,
    is_near_parallel_cosine, is_near_same_direction_cosine, is_near_reversal_cosine,
    is_near_parallel_sq, cosine_of_degrees, is_finite, check_finite,
)
from .types import (
    Coord, BBox, Point2, Vector2, UnitVector2, Point3, Vector3, UnitVector3, Quaternion, Line2,
)
from .geometry import (
    distance, distance_sq, midpoint, lerp, is_equal,
    unitize, direction, left_normal, offset_point,
    signed_angle, angle_between, rotate, rotate_by_quaternion, rotate_point,
    closest_parameter, project_onto_line, closest_point_on_segment, distance_sq_to_segment,
    to_point3,
)
from .intersect import (
    IntersectPoint, Parallel, Coincident, NoIntersection, LineIntersection,
    intersect_lines, segments_touch,
)
from .logging_config import setup_logging
