"""Offset engine: parallel curves of polylines and loops with explicit joint policies."""

from .policies import (
    UTurnBehavior, ParallelHandling,
    OffsetErrorKind, OffsetError, OffsetOk, OffsetErr, OffsetResult,
)
from .engine import Joint, offset, offset_variable
