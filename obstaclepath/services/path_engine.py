from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from obstaclepath.config import Settings, settings as default_settings
from obstaclepath.observability.logging import configure_logging
from obstaclepath.schemas.geometry import Point, Polygon
from obstaclepath.schemas.graph import PathResult, SceneSnapshot, VisibilityGraph
from obstaclepath.services.geometry import distance
from obstaclepath.services.obstacle_set import ObstacleSet
from obstaclepath.services.path_solver import PathSolver
from obstaclepath.services.visibility_graph import VisibilityGraphBuilder
from obstaclepath.utils.hashing import scene_fingerprint

logger = logging.getLogger("obstaclepath.path_engine")

PointLike = Union[Point, Tuple[float, float], Dict[str, float]]


def _as_point(p: PointLike) -> Point:
    if isinstance(p, Point):
        return p
    if isinstance(p, dict):
        return Point.model_validate(p)
    return Point.of(p)


class PathEngine:
    """Owns obstacles, the in-progress sketch and the query endpoints.

    Every mutating call runs to completion and leaves the visibility graph
    and path recomputed for the new state. A front end only reads the
    current_* accessors back for display.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        if self.settings.log_configure:
            # no-op once the package logger has a handler
            configure_logging(self.settings)

        self.obstacles = ObstacleSet()
        self.builder = VisibilityGraphBuilder()
        self.solver = PathSolver()

        self._sketch: List[Point] = []
        self._start: Optional[Point] = None
        self._end: Optional[Point] = None

        self._graph = VisibilityGraph()
        self._path = PathResult()

    # ── helpers ──────────────────────────────────────────────

    @property
    def query_active(self) -> bool:
        return self._start is not None and self._end is not None

    def _outside_obstacles(self, p: Point) -> bool:
        if not self.settings.reject_endpoints_inside_obstacles:
            return True
        return not self.obstacles.contains_point(p)

    def _recompute(self) -> None:
        polygons = self.obstacles.polygons
        if self.query_active:
            self._graph = self.builder.rebuild(polygons, self._start, self._end)
            self._path = self.solver.solve(self._graph)
        else:
            self._graph = self.builder.rebuild(polygons)
            self._path = PathResult(status="NO_QUERY")

    # ── obstacles ────────────────────────────────────────────

    def add_obstacle(self, points: Iterable[PointLike]) -> Optional[Polygon]:
        """Insert a closed polygon, merging it with anything it overlaps.

        Fewer than 3 distinct points is a no-op and returns None.
        """
        stored = self.obstacles.add_polygon(_as_point(p) for p in points)
        if stored is None:
            return None

        if self.query_active and not (
            self._outside_obstacles(self._start) and self._outside_obstacles(self._end)
        ):
            logger.info("Query cleared: an endpoint is now inside an obstacle")
            self._start = self._end = None

        self._recompute()
        return stored

    def reset(self) -> None:
        self.obstacles.reset()
        self._sketch.clear()
        self._start = self._end = None
        self._graph = VisibilityGraph()
        self._path = PathResult()
        logger.info("Engine reset")

    # ── sketching ────────────────────────────────────────────

    def add_sketch_point(self, p: PointLike) -> Optional[Polygon]:
        """Extend the sketch, or close it when p lands near its first point."""
        p = _as_point(p)
        if self.query_active:
            self.clear_query()

        if self._sketch and distance(self._sketch[0], p) <= self.settings.snap_radius:
            if len(self._sketch) > 2:
                return self.close_sketch()
            return None

        self._sketch.append(p)
        return None

    def close_sketch(self) -> Optional[Polygon]:
        if len(self._sketch) < 3:
            return None
        points, self._sketch = self._sketch, []
        return self.add_obstacle(points)

    def cancel_sketch(self) -> None:
        self._sketch = []

    def current_sketch(self) -> List[Point]:
        return list(self._sketch)

    # ── query ────────────────────────────────────────────────

    def set_query_endpoints(self, start: PointLike, end: PointLike) -> bool:
        """Replace both endpoints. Refused while a sketch is in progress."""
        start, end = _as_point(start), _as_point(end)
        if self._sketch:
            logger.debug("Rejected query while a sketch of %d point(s) is open", len(self._sketch))
            return False
        if not (self._outside_obstacles(start) and self._outside_obstacles(end)):
            logger.debug("Rejected query endpoints inside an obstacle: %s -> %s", start, end)
            self.clear_query()
            return False
        self._start, self._end = start, end
        self._recompute()
        return True

    def begin_query(self, p: PointLike) -> bool:
        """Start a query at p with the end on top of it (a zero-length path)."""
        p = _as_point(p)
        return self.set_query_endpoints(p, p)

    def move_query_end(self, p: PointLike) -> bool:
        p = _as_point(p)
        if not self.query_active or not self._outside_obstacles(p):
            return False
        self._end = p
        self._recompute()
        return True

    def clear_query(self) -> None:
        self._start = self._end = None
        self._recompute()

    # ── read-only views ──────────────────────────────────────

    def current_obstacles(self) -> List[Polygon]:
        return self.obstacles.polygons

    def current_query(self) -> Tuple[Optional[Point], Optional[Point]]:
        return self._start, self._end

    def current_visibility_graph(self) -> VisibilityGraph:
        return self._graph

    def current_path(self) -> List[Point]:
        return list(self._path.points)

    def current_path_result(self) -> PathResult:
        return self._path

    def snapshot(self) -> SceneSnapshot:
        obstacles = self.current_obstacles()
        return SceneSnapshot(
            obstacles=obstacles,
            sketch=self.current_sketch(),
            start=self._start,
            end=self._end,
            graph=self._graph,
            path=self._path,
            fingerprint=scene_fingerprint(
                {"obstacles": obstacles, "sketch": self._sketch, "start": self._start, "end": self._end}
            ),
        )
