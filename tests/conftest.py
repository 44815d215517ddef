"""Test fixtures: engine without logging side effects + canonical obstacle shapes."""

from __future__ import annotations

from typing import List

import pytest

from obstaclepath.config import Settings
from obstaclepath.schemas.geometry import Point, Polygon
from obstaclepath.services.obstacle_set import normalize_winding
from obstaclepath.services.path_engine import PathEngine


def pts(*coords) -> List[Point]:
    return [Point(x=x, y=y) for x, y in coords]


def poly(*coords) -> Polygon:
    return Polygon(points=tuple(pts(*coords)))


# All convex: no reflex corners at all
SQUARE = [(4, -2), (6, -2), (6, 2), (4, 2)]

# One reflex corner at (1, 1), notch opening towards +x/+y
L_SHAPE = [(0, 0), (4, 0), (4, 1), (1, 1), (1, 4), (0, 4)]

# Four reflex corners around the centre square (1..2, 1..2)
PLUS = [(1, 0), (2, 0), (2, 1), (3, 1), (3, 2), (2, 2), (2, 3), (1, 3), (1, 2), (0, 2), (0, 1), (1, 1)]

# Open towards +x: the gap between the arms is outside the shape
C_SHAPE = [(0, 0), (5, 0), (5, 1), (1, 1), (1, 4), (5, 4), (5, 5), (0, 5)]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test", log_configure=False)


@pytest.fixture
def engine(test_settings: Settings) -> PathEngine:
    return PathEngine(test_settings)


@pytest.fixture
def l_shape() -> Polygon:
    return normalize_winding(poly(*L_SHAPE))


@pytest.fixture
def plus_shape() -> Polygon:
    return normalize_winding(poly(*PLUS))


@pytest.fixture
def c_shape() -> Polygon:
    return normalize_winding(poly(*C_SHAPE))
