from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from shapely.geometry import MultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon

from obstaclepath.schemas.geometry import Point, Polygon
from obstaclepath.services.geometry import contains_point, is_polygon_clockwise, polygon_area

logger = logging.getLogger("obstaclepath.obstacle_set")


def _collapse_duplicates(points: Iterable[Point]) -> List[Point]:
    out: List[Point] = []
    for p in points:
        if not out or out[-1] != p:
            out.append(p)
    while len(out) > 1 and out[0] == out[-1]:
        out.pop()
    return out


def _region(polygon: Polygon) -> ShapelyPolygon:
    shape = ShapelyPolygon(polygon.coords())
    if not shape.is_valid:
        # self-intersecting sketch: repair the filled region for the overlap test
        shape = shape.buffer(0)
    return shape


def _overlaps(a: ShapelyPolygon, b: ShapelyPolygon) -> bool:
    # touching along an edge or at a corner is not an overlap
    return a.intersects(b) and a.intersection(b).area > 0


def _from_shape(shape) -> Polygon:
    if isinstance(shape, MultiPolygon):
        shape = max(shape.geoms, key=lambda g: g.area)
    if not isinstance(shape, ShapelyPolygon) or shape.is_empty:
        return Polygon()
    # exterior only: obstacles are solid, enclosed holes are filled
    coords = list(shape.exterior.coords)[:-1]
    return Polygon(points=tuple(_collapse_duplicates(Point(x=x, y=y) for x, y in coords)))


def normalize_winding(polygon: Polygon) -> Polygon:
    """Every stored obstacle runs counter-clockwise in screen coordinates.

    Reflex classification in the visibility graph relies on this.
    """
    return polygon.reversed() if is_polygon_clockwise(polygon) else polygon


class ObstacleSet:
    """Collection of pairwise non-overlapping obstacle polygons."""

    def __init__(self):
        self._polygons: List[Polygon] = []

    def __len__(self) -> int:
        return len(self._polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self._polygons)

    @property
    def polygons(self) -> List[Polygon]:
        return list(self._polygons)

    def add_polygon(self, points: Iterable[Point]) -> Optional[Polygon]:
        """Merge a closed sketch into the set.

        Every obstacle overlapping the new shape is absorbed into it, repeating
        until nothing overlaps. Returns the stored polygon, or None when the
        input is degenerate and was ignored.
        """
        pts = _collapse_duplicates(points)
        if len(pts) < 3:
            logger.warning("Ignoring obstacle with %d distinct points", len(pts))
            return None

        polygon = Polygon(points=tuple(pts))
        if polygon_area(polygon) == 0:
            logger.warning("Ignoring zero-area obstacle %s", polygon.coords())
            return None

        region = _region(polygon)
        absorbed = 0
        merged = True
        while merged:
            merged = False
            for existing in list(self._polygons):
                other = _region(existing)
                if _overlaps(region, other):
                    region = region.union(other)
                    self._polygons.remove(existing)
                    absorbed += 1
                    merged = True

        if absorbed:
            polygon = _from_shape(region)
            logger.info("Merged new obstacle with %d existing obstacle(s)", absorbed)

        polygon = normalize_winding(polygon)
        self._polygons.append(polygon)
        logger.info("Obstacle added: %d vertices, %d obstacle(s) total", polygon.size, len(self._polygons))
        return polygon

    def contains_point(self, p: Point) -> bool:
        """True when p lies strictly inside any obstacle."""
        return any(contains_point(polygon, p) for polygon in self._polygons)

    def reset(self) -> None:
        self._polygons.clear()
