from __future__ import annotations

import math
from typing import Iterator, Tuple

from obstaclepath.schemas.geometry import Point, Polygon


def distance(a: Point, b: Point) -> float:
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2)


def signed_cross(ux: float, uy: float, vx: float, vy: float) -> float:
    """Z component of the 2-D cross product u × v."""
    return ux * vy - uy * vx


def _orient(a: Point, b: Point, p: Point) -> float:
    return signed_cross(b.x - a.x, b.y - a.y, p.x - a.x, p.y - a.y)


def segments_cross(a: Point, b: Point, c: Point, d: Point) -> bool:
    """True only when AB and CD cross at a point strictly inside both.

    Parallel or collinear segments never cross, and neither do segments
    that merely touch at an endpoint.
    """
    denominator = (b.x - a.x) * (d.y - c.y) - (b.y - a.y) * (d.x - c.x)
    if denominator == 0:
        return False

    numerator1 = (a.y - c.y) * (d.x - c.x) - (a.x - c.x) * (d.y - c.y)
    numerator2 = (a.y - c.y) * (b.x - a.x) - (a.x - c.x) * (b.y - a.y)
    if numerator1 == 0 or numerator2 == 0:
        return False

    r = numerator1 / denominator
    s = numerator2 / denominator
    return 0 < r < 1 and 0 < s < 1


def polygon_edges(polygon: Polygon) -> Iterator[Tuple[Point, Point]]:
    pts = polygon.points
    n = len(pts)
    for i in range(n):
        yield pts[i], pts[(i + 1) % n]


def is_polygon_clockwise(polygon: Polygon) -> bool:
    """Shoelace sign test: a negative sum of (bx-ax)(by+ay) means clockwise.

    The convention matches screen coordinates (y grows downwards).
    """
    total = 0.0
    for a, b in polygon_edges(polygon):
        total += (b.x - a.x) * (b.y + a.y)
    return total < 0


def polygon_area(polygon: Polygon) -> float:
    twice = 0.0
    for a, b in polygon_edges(polygon):
        twice += a.x * b.y - b.x * a.y
    return abs(twice) / 2.0


def point_on_segment(p: Point, a: Point, b: Point) -> bool:
    if _orient(a, b, p) != 0:
        return False
    return min(a.x, b.x) <= p.x <= max(a.x, b.x) and min(a.y, b.y) <= p.y <= max(a.y, b.y)


def winding_number(p: Point, polygon: Polygon) -> int:
    wn = 0
    for a, b in polygon_edges(polygon):
        if a.y <= p.y:
            if b.y > p.y and _orient(a, b, p) > 0:
                wn += 1
        elif b.y <= p.y and _orient(a, b, p) < 0:
            wn -= 1
    return wn


def contains_point(polygon: Polygon, p: Point) -> bool:
    """Non-zero winding containment. Boundary points are not inside."""
    if polygon.size < 3:
        return False
    for a, b in polygon_edges(polygon):
        if point_on_segment(p, a, b):
            return False
    return winding_number(p, polygon) != 0


def is_reflex_vertex(polygon: Polygon, index: int) -> bool:
    """Turn test previous → current → next under the normalized winding.

    A non-negative cross product marks the vertex as reflex, so collinear
    vertices are kept as well.
    """
    n = polygon.size
    if n < 3:
        return False
    previous = polygon.points[index - 1]
    current = polygon.points[index]
    nxt = polygon.points[(index + 1) % n]

    left_x, left_y = current.x - previous.x, current.y - previous.y
    right_x, right_y = nxt.x - current.x, nxt.y - current.y
    return signed_cross(left_x, left_y, right_x, right_y) >= 0
