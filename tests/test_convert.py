"""Tests for hostio/convert.py array conversion."""
import logging
import math

import numpy as np
import pytest

from geom.errors import GeometryError, NanInfinityError
from hostio import as_point_array, from_core, to_core
from polyline import Loop, Polyline, area


RING = [(0, 0), (4, 0), (4, 3), (0, 3)]


# --- as_point_array ---

class TestAsPointArray:
    def test_accepts_2d(self):
        arr = as_point_array(RING)
        assert arr.shape == (4, 2)
        assert arr.dtype == float

    def test_drops_planar_z(self):
        arr = as_point_array([(x, y, 2.5) for x, y in RING])
        np.testing.assert_allclose(arr, np.array(RING, dtype=float))

    def test_rejects_non_planar(self):
        with pytest.raises(GeometryError, match="not planar"):
            as_point_array([(0, 0, 0), (1, 0, 0), (1, 1, 0.5)])

    def test_planar_tolerance(self):
        arr = as_point_array([(0, 0, 0), (1, 0, 1e-3)], planar_tol=0.01)
        assert arr.shape == (2, 2)

    def test_nan_names_row(self):
        with pytest.raises(NanInfinityError, match="row 1"):
            as_point_array([(0, 0), (math.nan, 1), (2, 2)])

    @pytest.mark.parametrize("bad", [[1, 2, 3], [[1, 2, 3, 4]], np.zeros((2, 2, 2))])
    def test_rejects_bad_shape(self, bad):
        with pytest.raises(GeometryError, match="shape"):
            as_point_array(bad)

    def test_empty(self):
        assert as_point_array([]).shape == (0, 2)


# --- to_core / from_core ---

class TestToCore:
    def test_open(self):
        poly = to_core(np.array(RING))
        assert type(poly) is Polyline
        assert len(poly) == 4

    def test_closed_ring_with_repeated_start(self):
        loop = to_core(RING + [RING[0]], closed=True)
        assert isinstance(loop, Loop)
        assert len(loop) == 4
        assert area(loop) == pytest.approx(12.0)

    def test_tolerances_passed_through(self):
        poly = to_core(RING, min_segment_length=0.5, snap_tolerance=0.05)
        assert poly.min_segment_length == 0.5
        assert poly.snap_tolerance == 0.05

    def test_keep_collinear(self):
        pts = [(0, 0), (5, 0), (10, 0)]
        assert len(to_core(pts)) == 2
        assert len(to_core(pts, keep_collinear=True)) == 3

    def test_snap_not_below_min_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="hostio.convert")
        to_core(RING, min_segment_length=0.01, snap_tolerance=0.01)
        assert "is not below min_segment_length" in caplog.text

    def test_nan_rejected(self):
        with pytest.raises(NanInfinityError):
            to_core([(0, 0), (1, math.inf)])


class TestFromCore:
    def test_round_trip(self):
        arr = np.array(RING, dtype=float)
        np.testing.assert_allclose(from_core(to_core(arr, closed=True)), arr)

    def test_repeat_first(self):
        out = from_core(to_core(RING, closed=True), repeat_first=True)
        assert out.shape == (5, 2)
        np.testing.assert_array_equal(out[0], out[-1])

    def test_repeat_first_ignored_for_open(self):
        out = from_core(to_core(RING), repeat_first=True)
        assert out.shape == (4, 2)

    def test_empty(self):
        assert from_core(to_core([])).shape == (0, 2)
