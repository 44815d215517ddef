import itertools

import pytest

from obstaclepath.schemas.geometry import Point
from obstaclepath.services.obstacle_set import normalize_winding
from obstaclepath.services.visibility_graph import (
    VisibilityGraphBuilder,
    build_visibility_graph,
    line_of_sight,
    reflex_vertices,
)

from conftest import SQUARE, poly


def P(x, y):
    return Point(x=x, y=y)


def test_reflex_vertices_of_shapes(l_shape, plus_shape, c_shape):
    assert reflex_vertices(l_shape) == [P(1, 1)]
    assert set(reflex_vertices(plus_shape)) == {P(1, 1), P(2, 1), P(2, 2), P(1, 2)}
    assert set(reflex_vertices(c_shape)) == {P(1, 1), P(1, 4)}
    assert reflex_vertices(normalize_winding(poly(*SQUARE))) == []


def test_degenerate_polygon_contributes_no_vertices():
    assert reflex_vertices(poly((0, 0), (1, 1))) == []


def test_identical_points_have_no_sight(l_shape):
    assert not line_of_sight(P(1, 1), P(1, 1), [l_shape])


def test_sight_blocked_by_proper_crossing():
    square = normalize_winding(poly(*SQUARE))
    assert not line_of_sight(P(0, 0), P(10, 0), [square])
    assert line_of_sight(P(0, 5), P(10, 5), [square])


def test_chord_through_own_interior_is_rejected(plus_shape):
    # diagonal across the centre square touches no edge but is inside the shape
    assert not line_of_sight(P(2, 1), P(1, 2), [plus_shape])
    # non-adjacent reflex corners along the bottom of the centre square
    assert not line_of_sight(P(1, 1), P(2, 1), [plus_shape])


def test_adjacent_vertices_see_each_other(plus_shape):
    assert line_of_sight(P(2, 1), P(3, 1), [plus_shape])
    # wrap-around neighbours: first and last ring entries
    first, last = plus_shape.points[0], plus_shape.points[-1]
    assert line_of_sight(first, last, [plus_shape])


def test_chord_outside_own_polygon_is_accepted(c_shape):
    # tips of the C arms look at each other across the open gap
    assert line_of_sight(P(5, 1), P(5, 4), [c_shape])
    # inner corner to far outer corner runs through the solid back wall
    assert not line_of_sight(P(1, 1), P(0, 5), [c_shape])


def test_line_of_sight_is_symmetric(l_shape, plus_shape, c_shape):
    obstacles = [l_shape, plus_shape, c_shape]
    shifted = []
    for dx, shape in zip((0, 10, 20), obstacles):
        shifted.append(poly(*[(p.x + dx, p.y) for p in shape.points]))
    candidates = [v for s in shifted for v in s.points] + [P(-1, -1), P(30, 6)]
    for a, b in itertools.combinations(candidates, 2):
        assert line_of_sight(a, b, shifted) == line_of_sight(b, a, shifted)


def test_vertex_order_and_count_with_query(l_shape, plus_shape):
    plus = poly(*[(p.x + 10, p.y) for p in plus_shape.points])
    start, end = P(-5, -5), P(20, 20)
    graph = build_visibility_graph([l_shape, plus], start, end)

    assert graph.size == 1 + 1 + 4 + 1
    assert graph.vertices[0] == start
    assert graph.vertices[-1] == end
    assert graph.vertices[1] == P(1, 1)
    assert graph.vertices[2:-1] == reflex_vertices(plus)
    assert (graph.start_index, graph.end_index) == (0, graph.size - 1)


def test_vertex_count_without_query(l_shape, c_shape):
    c = poly(*[(p.x + 10, p.y) for p in c_shape.points])
    graph = build_visibility_graph([l_shape, c])
    assert graph.size == 3
    assert graph.start_index is None and graph.end_index is None


def test_start_without_end_is_not_a_query(l_shape):
    graph = build_visibility_graph([l_shape], P(5, 5), None)
    assert graph.size == 1
    assert graph.start_index is None


def test_matrix_is_symmetric_without_self_loops(l_shape, c_shape):
    c = poly(*[(p.x + 10, p.y) for p in c_shape.points])
    graph = build_visibility_graph([l_shape, c], P(-3, 8), P(18, -2))
    n = graph.size
    assert len(graph.edges) == n and all(len(row) == n for row in graph.edges)
    for i in range(n):
        assert graph.edges[i][i] is False
        for j in range(n):
            assert graph.edges[i][j] == graph.edges[j][i]


def test_empty_scene_connects_start_and_end():
    graph = build_visibility_graph([], P(0, 0), P(10, 0))
    assert graph.vertices == [P(0, 0), P(10, 0)]
    assert graph.edges == [[False, True], [True, False]]
    assert graph.neighbours(0) == [1]
    assert graph.edge_count() == 1


@pytest.mark.parametrize("start,end", [((0, 0), (10, 0)), ((5, 5), (5, -5))])
def test_builder_matches_function(start, end):
    square = normalize_winding(poly(*SQUARE))
    a = VisibilityGraphBuilder().rebuild([square], P(*start), P(*end))
    b = build_visibility_graph([square], P(*start), P(*end))
    assert a == b
    assert a.edges[0][1] is False
