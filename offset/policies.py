"""Joint-resolution policies and the offset result variant."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from geom.errors import OffsetFailure
from geom.types import Point2
from polyline.model import Polyline


class UTurnBehavior(enum.Enum):
    """What to do at a joint that turns by nearly 180 degrees."""
    FAIL = "fail"            # OffsetErr(DEGENERATE_JOINT)
    CHAMFER = "chamfer"      # two vertices on a connecting chamfer
    SKIP = "skip"            # no vertex, the neighbours join directly
    THRESHOLD = "threshold"  # mitre below the threshold angle, chamfer above


class ParallelHandling(enum.Enum):
    """What to do where adjacent offset edges are parallel but offset by different distances."""
    FAIL = "fail"                  # OffsetErr(PARALLEL_JOINT)
    SKIP = "skip"                  # drop the joint vertex
    PROPORTIONAL = "proportional"  # blend of both edge endpoints, weighted by edge length
    PROJECT = "project"            # previous endpoint projected onto the next offset edge


class OffsetErrorKind(enum.Enum):
    DEGENERATE_JOINT = "degenerate_joint"
    PARALLEL_JOINT = "parallel_joint"
    NO_INTERSECTION = "no_intersection"
    TOO_FEW_POINTS = "too_few_points"
    COLLAPSED = "collapsed"
    NON_FINITE = "non_finite"


@dataclass(frozen=True, slots=True, eq=False)
class OffsetError:
    """Why an offset failed; *index* and *point* locate the input vertex when known."""
    kind: OffsetErrorKind
    message: str
    index: Optional[int] = None
    point: Optional[Point2] = None

    def __str__(self):
        where = f" at vertex {self.index}" if self.index is not None else ""
        return f"{self.kind.value}{where}: {self.message}"


@dataclass(frozen=True, slots=True, eq=False)
class OffsetOk:
    polyline: Polyline

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Polyline:
        return self.polyline


@dataclass(frozen=True, slots=True, eq=False)
class OffsetErr:
    error: OffsetError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Polyline:
        raise OffsetFailure(self.error)


OffsetResult = OffsetOk | OffsetErr
