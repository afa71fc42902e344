"""Tests for offset/engine.py: constant and per-segment offsets and joint policies."""
import math
import pytest

from geom.constants import COS_0_01, COS_179
from geom.errors import GeometryError, NanInfinityError, OffsetFailure
from polyline import (
    Loop, area, bounding_box, build, has_finite_points, is_ccw, is_simple, same_shape,
)
from offset import (
    OffsetErr, OffsetErrorKind, OffsetOk, ParallelHandling, UTurnBehavior,
    offset, offset_variable,
)


def _xy(poly):
    return [(round(p.x, 9), round(p.y, 9)) for p in poly.points]


def _hairpin(degrees):
    """Open path turning left by *degrees* at (10, 0)."""
    a = math.radians(180.0 - degrees)
    return build([(0, 0), (10, 0), (10 - 10 * math.cos(a), 10 * math.sin(a))])


@pytest.fixture
def u_turn_path():
    return build([(0, 0), (10, 0), (0, 0)])


# --- constant offsets of loops ---

class TestLoopOffset:
    def test_square_outward(self, square):
        res = offset(square, 1.0)
        assert isinstance(res, OffsetOk) and res.ok
        expected = build([(-1, -1), (11, -1), (11, 11), (-1, 11)], closed=True)
        assert same_shape(res.polyline, expected)

    def test_square_inward(self, square):
        res = offset(square, -1.0)
        expected = build([(1, 1), (9, 1), (9, 9), (1, 9)], closed=True)
        assert same_shape(res.unwrap(), expected)

    def test_positive_is_outward_for_either_winding(self, square, cw_square):
        ccw = offset(square, 1.0).unwrap()
        cw = offset(cw_square, 1.0).unwrap()
        assert area(cw) == pytest.approx(144.0)
        assert bounding_box(cw) == bounding_box(ccw)

    def test_winding_preserved(self, square, cw_square):
        assert is_ccw(offset(square, 2.0).unwrap())
        assert not is_ccw(offset(cw_square, 2.0).unwrap())

    def test_result_is_loop(self, triangle):
        assert isinstance(offset(triangle, 0.5).unwrap(), Loop)

    def test_l_shape_reflex_corner(self, l_shape):
        res = offset(l_shape, 1.0).unwrap()
        expected = build([(-1, -1), (13, -1), (13, 6), (6, 6), (6, 13), (-1, 13)], closed=True)
        assert same_shape(res, expected)

    @pytest.mark.parametrize("fixture", ["square", "cw_square", "triangle", "l_shape"])
    def test_area_grows_outward_and_shrinks_inward(self, fixture, request):
        loop = request.getfixturevalue(fixture)
        assert area(offset(loop, 0.5).unwrap()) > area(loop)
        assert area(offset(loop, -0.5).unwrap()) < area(loop)

    def test_small_inward_offset_stays_simple(self, l_shape):
        assert is_simple(offset(l_shape, -1.0).unwrap())

    def test_inward_collapse(self, square):
        res = offset(square, -5.0)
        assert isinstance(res, OffsetErr)
        assert res.error.kind is OffsetErrorKind.COLLAPSED

    def test_result_keeps_tolerances(self):
        loop = build([(0, 0), (10, 0), (10, 10), (0, 10)], 0.5, 0.01, closed=True)
        res = offset(loop, 1.0).unwrap()
        assert res.min_segment_length == 0.5
        assert res.snap_tolerance == 0.01


# --- zero distance ---

@pytest.mark.parametrize("fixture", ["square", "cw_square", "l_shape", "spike_loop",
                                     "straight_path", "corner_path"])
def test_zero_offset_is_identity(fixture, request):
    poly = request.getfixturevalue(fixture)
    assert same_shape(offset(poly, 0.0).unwrap(), poly)


# --- open polylines ---

class TestOpenOffset:
    def test_positive_is_left(self, corner_path):
        res = offset(corner_path, 1.0).unwrap()
        assert _xy(res) == [(0, 1), (9, 1), (9, 10)]

    def test_negative_is_right(self, corner_path):
        res = offset(corner_path, -1.0).unwrap()
        assert _xy(res) == [(0, -1), (11, -1), (11, 10)]

    def test_single_segment(self):
        res = offset(build([(0, 0), (3, 4)]), 5.0).unwrap()
        assert _xy(res) == [(-4, 3), (-1, 7)]

    def test_collinear_vertex_survives(self, straight_path):
        res = offset(straight_path, 1.0).unwrap()
        assert _xy(res) == [(0, 1), (10, 1), (20, 1)]

    def test_not_closed(self, corner_path):
        assert not offset(corner_path, 1.0).unwrap().closed

    @pytest.mark.parametrize("parallel_cos", [COS_0_01, None])
    def test_slight_bend_is_a_plain_join(self, parallel_cos):
        path = build([(0, 0), (10, 0), (20, 10 * math.tan(math.radians(0.1)))], keep_collinear=True)
        kwargs = {} if parallel_cos is None else {"parallel_cos": parallel_cos}
        res = offset(path, 1.0, **kwargs)
        assert res.ok
        mid = res.unwrap()[1]
        assert abs(mid.x - 10) < 0.01
        assert abs(mid.y - 1) < 0.01


# --- u-turns ---

class TestUTurn:
    def test_fail_reports_vertex(self, spike_loop):
        res = offset(spike_loop, 1.0)
        assert not res.ok
        assert res.error.kind is OffsetErrorKind.DEGENERATE_JOINT
        assert res.error.index == 2
        assert (res.error.point.x, res.error.point.y) == (5, -5)

    def test_chamfer_caps_spike(self, spike_loop):
        res = offset(spike_loop, 1.0, UTurnBehavior.CHAMFER).unwrap()
        assert _xy(res) == [(-1, -1), (4, -1), (4, -6), (6, -6), (6, -1),
                            (11, -1), (11, 11), (-1, 11)]

    def test_skip_drops_tip(self, spike_loop):
        res = offset(spike_loop, 1.0, UTurnBehavior.SKIP).unwrap()
        assert len(res) == 6
        assert all(p.y > -2 for p in res)

    def test_threshold_chamfers_exact_reversal(self, spike_loop):
        res = offset(spike_loop, 1.0, UTurnBehavior.THRESHOLD).unwrap()
        assert len(res) == 8

    @pytest.mark.parametrize("behavior", list(UTurnBehavior))
    def test_every_behavior_gives_finite_result_or_error(self, spike_loop, behavior):
        res = offset(spike_loop, 1.0, behavior)
        if res.ok:
            assert has_finite_points(res.polyline)
        else:
            assert behavior is UTurnBehavior.FAIL

    def test_skip_never_adds_vertices(self, spike_loop, square):
        assert len(offset(spike_loop, 1.0, UTurnBehavior.SKIP).unwrap()) < len(spike_loop)
        assert len(offset(square, 1.0, UTurnBehavior.SKIP).unwrap()) == len(square)

    def test_open_reversal_left(self, u_turn_path):
        res = offset(u_turn_path, 1.0, UTurnBehavior.CHAMFER).unwrap()
        assert _xy(res) == [(0, 1), (11, 1), (11, -1), (0, -1)]

    def test_open_reversal_right(self, u_turn_path):
        res = offset(u_turn_path, -1.0, UTurnBehavior.CHAMFER).unwrap()
        assert _xy(res) == [(0, -1), (11, -1), (11, 1), (0, 1)]

    def test_near_reversal_threshold_mitres(self):
        path = _hairpin(177.0)
        assert len(offset(path, -0.1, UTurnBehavior.THRESHOLD).unwrap()) == 3
        assert len(offset(path, -0.1, UTurnBehavior.CHAMFER).unwrap()) == 4
        assert offset(path, -0.1).error.kind is OffsetErrorKind.DEGENERATE_JOINT

    def test_threshold_angle_is_configurable(self):
        path = _hairpin(177.0)
        res = offset(path, -0.1, UTurnBehavior.THRESHOLD, threshold_cos=-0.99)
        assert len(res.unwrap()) == 4

    def test_u_turn_angle_is_configurable(self):
        res = offset(_hairpin(177.0), -0.1, u_turn_cos=COS_179)
        assert len(res.unwrap()) == 3

    def test_error_message_names_angles(self, spike_loop):
        err = offset(spike_loop, 1.0).error
        assert "180.0000" in err.message
        assert str(err).startswith("degenerate_joint at vertex 2:")


# --- per-segment distances ---

class TestVariableOffset:
    def test_loop_distances_per_segment(self, square):
        res = offset_variable(square, [1, 2, 1, 2]).unwrap()
        expected = build([(-2, -1), (12, -1), (12, 11), (-2, 11)], closed=True)
        assert same_shape(res, expected)

    def test_equal_distances_match_constant_offset(self, l_shape):
        a = offset_variable(l_shape, [1.5] * 6).unwrap()
        assert same_shape(a, offset(l_shape, 1.5).unwrap())

    def test_collinear_equal_distances(self, straight_path):
        res = offset_variable(straight_path, [1, 1]).unwrap()
        assert _xy(res) == [(0, 1), (10, 1), (20, 1)]

    def test_parallel_fail(self, straight_path):
        res = offset_variable(straight_path, [1, 2])
        assert res.error.kind is OffsetErrorKind.PARALLEL_JOINT
        assert res.error.index == 1

    def test_parallel_proportional(self, straight_path):
        res = offset_variable(straight_path, [1, 2], parallel=ParallelHandling.PROPORTIONAL)
        assert _xy(res.unwrap()) == [(0, 1), (10, 1.5), (20, 2)]

    def test_proportional_weights_by_length(self):
        path = build([(0, 0), (30, 0), (40, 0)], keep_collinear=True)
        res = offset_variable(path, [1, 2], parallel=ParallelHandling.PROPORTIONAL).unwrap()
        assert res[1].y == pytest.approx(1.75)

    def test_parallel_project(self, straight_path):
        res = offset_variable(straight_path, [1, 2], parallel=ParallelHandling.PROJECT)
        assert _xy(res.unwrap()) == [(0, 1), (10, 2), (20, 2)]

    def test_parallel_skip(self, straight_path):
        res = offset_variable(straight_path, [1, 2], parallel=ParallelHandling.SKIP)
        assert _xy(res.unwrap()) == [(0, 1), (20, 2)]

    def test_wrong_distance_count(self, square):
        with pytest.raises(GeometryError, match="expected 4 distances, got 2"):
            offset_variable(square, [1, 2])


# --- failures ---

class TestFailures:
    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_distance_raises(self, square, bad):
        with pytest.raises(NanInfinityError):
            offset(square, bad)

    def test_non_finite_variable_distance_raises(self, straight_path):
        with pytest.raises(NanInfinityError, match="offset_variable"):
            offset_variable(straight_path, [1.0, math.nan])

    @pytest.mark.parametrize("points", [[], [(1, 1)]])
    def test_too_few_points(self, points):
        res = offset(build(points), 1.0)
        assert res.error.kind is OffsetErrorKind.TOO_FEW_POINTS

    def test_unwrap_raises(self, spike_loop):
        res = offset(spike_loop, 1.0)
        with pytest.raises(OffsetFailure, match="u-turn limit") as info:
            res.unwrap()
        assert info.value.error is res.error
        assert isinstance(info.value, GeometryError)
