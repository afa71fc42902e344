"""Tolerance predicates shared by every geometry module.

All predicates are written as ``not (x > tol)`` where a NaN must count as
negligible, so a NaN length can never pass as a usable direction.
"""
import math

from .constants import TOO_SMALL, TOO_SMALL_SQ, ZERO_LENGTH, UNIT_TOLERANCE
from .errors import NanInfinityError


# ============================================================
# Length Predicates
# ============================================================
def is_negligible_length(x: float, tol: float = TOO_SMALL) -> bool:
    """True if length *x* is below *tol* (or NaN)."""
    return not (x > tol)

def is_negligible_length_sq(x: float, tol: float = TOO_SMALL_SQ) -> bool:
    """True if squared length *x* is below *tol* (or NaN)."""
    return not (x > tol)

def is_negligible_divisor(x: float) -> bool:
    """True if |x| is too small to divide by."""
    return not (abs(x) > ZERO_LENGTH)

def is_near_zero(x: float, tol: float = TOO_SMALL) -> bool:
    return -tol < x < tol

def is_near_equal(a: float, b: float, tol: float = TOO_SMALL) -> bool:
    return abs(a - b) < tol

def is_one(x: float, tol: float = UNIT_TOLERANCE) -> bool:
    """True if *x* is within *tol* of 1.0."""
    return 1.0 - tol < x < 1.0 + tol


# ============================================================
# Angle Predicates (on cosines of unit-vector pairs)
# ============================================================
def is_near_parallel_cosine(cos: float, threshold_cos: float) -> bool:
    """Parallel or anti-parallel within the angle whose cosine is *threshold_cos*."""
    return abs(cos) >= threshold_cos

def is_near_same_direction_cosine(cos: float, threshold_cos: float) -> bool:
    """Angle between the vectors is below the threshold angle."""
    return cos >= threshold_cos

def is_near_reversal_cosine(cos: float, threshold_cos: float) -> bool:
    """Angle between the vectors is above the threshold angle (e.g. COS_175)."""
    return cos <= threshold_cos

def is_near_parallel_sq(dot: float, len_sq_a: float, len_sq_b: float, threshold_cos: float) -> bool:
    """Parallel test for non-unit vectors without square roots.

    Compares dot^2 against threshold^2 * |a|^2 * |b|^2.
    """
    return dot * dot >= threshold_cos * threshold_cos * len_sq_a * len_sq_b

def cosine_of_degrees(degrees: float) -> float:
    """Cosine threshold for a caller-chosen angle in degrees."""
    return math.cos(math.radians(degrees))


# ============================================================
# Finite-Value Validation
# ============================================================
def is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)

def check_finite(op: str, *values: float) -> None:
    """Raise NanInfinityError naming *op* if any value is NaN or Infinity."""
    if not is_finite(*values):
        raise NanInfinityError(f"NaN or Infinity in {values}", op=op, values=values)
