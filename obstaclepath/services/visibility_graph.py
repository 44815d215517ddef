from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from obstaclepath.schemas.geometry import Point, Polygon
from obstaclepath.schemas.graph import VisibilityGraph
from obstaclepath.services.geometry import contains_point, is_reflex_vertex, polygon_edges, segments_cross

logger = logging.getLogger("obstaclepath.visibility_graph")


def reflex_vertices(polygon: Polygon) -> List[Point]:
    """Vertices that can bend a path, in polygon order. Degenerate shapes yield none."""
    if polygon.size < 3:
        return []
    return [polygon.points[i] for i in range(polygon.size) if is_reflex_vertex(polygon, i)]


def line_of_sight(a: Point, b: Point, obstacles: Sequence[Polygon]) -> bool:
    """Whether the segment AB is unobstructed by every obstacle.

    Besides proper edge crossings, a chord between two vertices of the same
    obstacle is rejected unless the vertices are neighbours on the ring or
    the chord's midpoint lies outside that obstacle.
    """
    if a == b:
        return False

    owner: Optional[Polygon] = None
    for polygon in obstacles:
        if owner is None and polygon.index_of(a) >= 0 and polygon.index_of(b) >= 0:
            owner = polygon
        for c, d in polygon_edges(polygon):
            if segments_cross(c, d, a, b):
                return False

    if owner is not None:
        gap = abs(owner.index_of(a) - owner.index_of(b))
        if gap == 1 or gap == owner.size - 1:
            return True
        midpoint = Point(x=(a.x + b.x) / 2, y=(a.y + b.y) / 2)
        return not contains_point(owner, midpoint)

    return True


def build_visibility_graph(
    obstacles: Sequence[Polygon],
    start: Optional[Point] = None,
    end: Optional[Point] = None,
) -> VisibilityGraph:
    """Index start, every reflex vertex and end, then test all pairs for sight.

    Start and end are only indexed when both are given; start takes index 0
    and end the last index.
    """
    query = start is not None and end is not None

    vertices: List[Point] = []
    if query:
        vertices.append(start)
    for polygon in obstacles:
        vertices.extend(reflex_vertices(polygon))
    if query:
        vertices.append(end)

    n = len(vertices)
    edges = [[False] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            edges[i][j] = edges[j][i] = line_of_sight(vertices[i], vertices[j], obstacles)

    graph = VisibilityGraph(
        vertices=vertices,
        edges=edges,
        start_index=0 if query else None,
        end_index=n - 1 if query else None,
    )
    logger.debug("Visibility graph rebuilt: %d vertices, %d edges", n, graph.edge_count())
    return graph


class VisibilityGraphBuilder:
    """Rebuilds the graph from scratch on every topology or query change."""

    def rebuild(
        self,
        obstacles: Sequence[Polygon],
        start: Optional[Point] = None,
        end: Optional[Point] = None,
    ) -> VisibilityGraph:
        return build_visibility_graph(obstacles, start, end)
