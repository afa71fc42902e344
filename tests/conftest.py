"""Shared test fixtures for the geometry, polyline and offset tests."""
import os

# Value-type validation must be on; read once when geom is first imported
os.environ["GEOM_PROFILE"] = "checked"

import pytest

from polyline import build


@pytest.fixture
def square():
    """CCW 10 x 10 square loop."""
    return build([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True)


@pytest.fixture
def cw_square():
    """The same square wound clockwise."""
    return build([(0, 0), (0, 10), (10, 10), (10, 0)], closed=True)


@pytest.fixture
def triangle():
    return build([(0, 0), (8, 0), (3, 6)], closed=True)


@pytest.fixture
def l_shape():
    """CCW L-shaped loop with one reflex corner at (5, 5)."""
    return build([(0, 0), (12, 0), (12, 5), (5, 5), (5, 12), (0, 12)], closed=True)


@pytest.fixture
def spike_loop():
    """Square with a zero-width spike: an exact 180 degree turn at (5, -5)."""
    return build([(0, 0), (5, 0), (5, -5), (5, 0), (10, 0), (10, 10), (0, 10)], closed=True)


@pytest.fixture
def straight_path():
    """Open path with a collinear middle vertex kept on purpose."""
    return build([(0, 0), (10, 0), (20, 0)], keep_collinear=True)


@pytest.fixture
def corner_path():
    """Open path turning left at (10, 0)."""
    return build([(0, 0), (10, 0), (10, 10)])
