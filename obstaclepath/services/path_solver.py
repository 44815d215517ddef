from __future__ import annotations

import logging
import math
from typing import List, Optional

from obstaclepath.schemas.graph import PathResult, VisibilityGraph
from obstaclepath.services.geometry import distance

logger = logging.getLogger("obstaclepath.path_solver")


def _path_length(graph: VisibilityGraph, indices: List[int]) -> float:
    return sum(distance(graph.vertices[u], graph.vertices[v]) for u, v in zip(indices, indices[1:]))


def dijkstra(graph: VisibilityGraph) -> PathResult:
    """Shortest path from vertex 0 to the last vertex.

    Uses a plain linear scan for the next vertex; the graph holds one vertex
    per reflex corner so this stays small. Stops as soon as the end vertex is
    selected.
    """
    if graph.start_index is None or graph.end_index is None:
        return PathResult(status="NO_QUERY")

    start, end = graph.start_index, graph.end_index
    if graph.vertices[start] == graph.vertices[end]:
        return PathResult(status="FOUND", indices=[start], points=[graph.vertices[start]])

    n = graph.size
    dist = [math.inf] * n
    prev: List[Optional[int]] = [None] * n
    dist[start] = 0.0
    pending = list(range(n))

    while pending:
        u = None
        best = math.inf
        for x in pending:
            if dist[x] < best:
                best = dist[x]
                u = x
        if u is None or u == end:
            break
        pending.remove(u)

        for v in graph.neighbours(u):
            alt = dist[u] + distance(graph.vertices[u], graph.vertices[v])
            if alt < dist[v]:
                dist[v] = alt
                prev[v] = u

    if prev[end] is None:
        logger.debug("No path: end vertex unreachable from start (%d vertices)", n)
        return PathResult(status="UNREACHABLE")

    indices = [end]
    while prev[indices[-1]] is not None:
        indices.append(prev[indices[-1]])
    indices.reverse()

    result = PathResult(
        status="FOUND",
        indices=indices,
        points=[graph.vertices[i] for i in indices],
        length=_path_length(graph, indices),
    )
    logger.debug("Path found: %d waypoints, length %.3f", len(indices), result.length)
    return result


class PathSolver:
    def solve(self, graph: VisibilityGraph) -> PathResult:
        return dijkstra(graph)
