"""
Unit tests for the search algorithms.

Cost-aware results are checked against a Bellman-Ford reference on random
weighted grids.
"""

import math

import numpy as np
import pytest

from conftest import ALGORITHMS, COST_AWARE_ALGORITHMS
from gridsearch.algorithms import (
    AStarSearch,
    BreadthFirstSearch,
    GreedyBestFirstSearch,
    LPAStarSearch,
    QueryStatus,
    UniformCostSearch,
    create_algorithm,
    path_cost,
    straight_path_bias,
)
from gridsearch.graph import Graph, Location, Node, build_grid, build_grid_from_costs


def reference_costs(graph: Graph, start: tuple[int, int]) -> dict:
    """Bellman-Ford distances over non-negative edges."""
    dist = {node.location: math.inf for node in graph}
    dist[Location(*start)] = 0.0
    for _ in range(len(graph)):
        changed = False
        for node in graph:
            if dist[node.location] == math.inf:
                continue
            for edge in node.edges:
                if edge.cost < 0:
                    continue
                candidate = dist[node.location] + edge.cost
                if candidate < dist[edge.target.location]:
                    dist[edge.target.location] = candidate
                    changed = True
        if not changed:
            break
    return dist


def assert_valid_path(graph: Graph, path: list, start, goal) -> None:
    assert path[0].location == Location(*start)
    assert path[-1].location == Location(*goal)
    for current, following in zip(path, path[1:]):
        edge = graph.get_edge(current, following)
        assert edge is not None and edge.cost >= 0


def random_directed_grid(width: int, height: int, seed: int) -> Graph:
    """Grid with asymmetric costs in 1..9 and about a fifth of edges missing."""
    rng = np.random.default_rng(seed)
    graph = Graph()
    for y in range(height):
        for x in range(width):
            graph.add_node(Node((x, y)))
    for node in graph.nodes:
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            neighbor = graph.get_node((node.x + dx, node.y + dy))
            if neighbor is not None and rng.random() < 0.8:
                graph.add_edge(node, neighbor, int(rng.integers(1, 10)))
    return graph


class TestBasicQueries:
    """Test behavior every algorithm shares."""

    @pytest.mark.parametrize("name", ALGORITHMS)
    def test_open_3x3_grid(self, grid3, name):
        """Corner to corner on a 3x3 unit grid takes 4 moves."""
        search = create_algorithm(name, grid3)
        path = search.find_nearest_path((0, 0), (2, 2))

        assert len(path) == 5
        assert_valid_path(grid3, path, (0, 0), (2, 2))
        assert path_cost(grid3, path) == 4
        assert search.last_diagnostic.status == QueryStatus.FOUND

    @pytest.mark.parametrize("name", ALGORITHMS)
    def test_start_equals_goal(self, grid3, name):
        """A query to the start itself returns a single-node path."""
        search = create_algorithm(name, grid3)
        path = search.find_nearest_path((1, 1), (1, 1))
        assert [node.location for node in path] == [(1, 1)]
        assert search.last_diagnostic.ok

    @pytest.mark.parametrize("name", ALGORITHMS)
    def test_unreachable_goal(self, split_graph, name):
        """No connecting edges gives an empty path, not an exception."""
        search = create_algorithm(name, split_graph)
        assert search.find_nearest_path((0, 0), (1, 0)) == []
        assert search.last_diagnostic.status == QueryStatus.UNREACHABLE

    @pytest.mark.parametrize("name", ALGORITHMS)
    def test_unknown_location(self, grid3, name):
        """A start or goal outside the graph is reported, not raised."""
        search = create_algorithm(name, grid3)

        assert search.find_nearest_path((0, 0), (7, 7)) == []
        assert search.last_diagnostic.status == QueryStatus.NODE_NOT_FOUND
        assert "Goal" in search.last_diagnostic.message

        assert search.find_nearest_path((-1, 0), (2, 2)) == []
        assert "Start" in search.last_diagnostic.message

    @pytest.mark.parametrize("name", ALGORITHMS)
    def test_repeat_query_is_identical(self, grid5, name):
        """Running the same query twice gives the same path."""
        search = create_algorithm(name, grid5)
        first = search.find_nearest_path((0, 4), (4, 0))
        second = search.find_nearest_path((0, 4), (4, 0))
        assert first == second

    @pytest.mark.parametrize("name", ALGORITHMS)
    def test_visited_starts_at_start(self, grid5, name):
        """The expansion trace begins with the start node."""
        search = create_algorithm(name, grid5)
        search.find_nearest_path((2, 2), (4, 4))
        assert search.visited[0].location == (2, 2)

    @pytest.mark.parametrize("name", ALGORITHMS)
    def test_description(self, grid3, name):
        """Every strategy names and describes itself."""
        search = create_algorithm(name, grid3)
        assert search.name == name
        assert search.description


class TestOptimality:
    """Cost-aware strategies return minimum-cost paths."""

    @pytest.mark.parametrize("seed", range(6))
    @pytest.mark.parametrize("name", COST_AWARE_ALGORITHMS)
    def test_matches_reference_on_weighted_grid(self, name, seed):
        """Path cost equals the Bellman-Ford distance."""
        rng = np.random.default_rng(seed)
        graph = build_grid_from_costs(rng.integers(1, 10, size=(5, 6)))
        start, goal = (0, 4), (5, 0)

        path = create_algorithm(name, graph).find_nearest_path(start, goal)

        assert_valid_path(graph, path, start, goal)
        assert path_cost(graph, path) == reference_costs(graph, start)[Location(*goal)]

    @pytest.mark.parametrize("seed", range(6))
    @pytest.mark.parametrize("name", COST_AWARE_ALGORITHMS)
    def test_matches_reference_on_directed_graph(self, name, seed):
        """Asymmetric costs and one-way edges are handled."""
        graph = random_directed_grid(5, 5, seed)
        start, goal = (0, 0), (4, 4)
        expected = reference_costs(graph, start)[Location(*goal)]

        search = create_algorithm(name, graph)
        path = search.find_nearest_path(start, goal)

        if expected == math.inf:
            assert path == []
            assert search.last_diagnostic.status == QueryStatus.UNREACHABLE
        else:
            assert_valid_path(graph, path, start, goal)
            assert path_cost(graph, path) == expected

    @pytest.mark.parametrize("cls", [UniformCostSearch, AStarSearch])
    def test_zero_bias_still_optimal(self, cls):
        """Disabling the bias keeps results optimal."""
        graph = build_grid_from_costs(np.random.default_rng(42).integers(1, 6, size=(6, 6)))
        path = cls(graph, straight_path_bias=0).find_nearest_path((0, 0), (5, 5))
        assert path_cost(graph, path) == reference_costs(graph, (0, 0))[Location(5, 5)]

    def test_walled_grid_costs(self, walled_grid):
        """Crossing slow terrain beats a long detour when it is cheaper."""
        for name in COST_AWARE_ALGORITHMS:
            path = create_algorithm(name, walled_grid).find_nearest_path((0, 0), (4, 0))
            assert path_cost(walled_grid, path) == 8

    @pytest.mark.parametrize("seed", range(6))
    @pytest.mark.parametrize("name", COST_AWARE_ALGORITHMS)
    def test_matches_reference_on_fractional_costs(self, name, seed):
        """Non-integer costs are compared exactly, not rounded by the bias."""
        rng = np.random.default_rng(100 + seed)
        graph = build_grid_from_costs(rng.uniform(1.0, 3.0, size=(8, 9)))
        start, goal = (0, 7), (8, 0)

        path = create_algorithm(name, graph).find_nearest_path(start, goal)

        assert_valid_path(graph, path, start, goal)
        expected = reference_costs(graph, start)[Location(*goal)]
        assert path_cost(graph, path) == pytest.approx(expected, rel=1e-12)

    @pytest.mark.parametrize("cls", [UniformCostSearch, AStarSearch])
    def test_bias_never_beats_a_cheaper_edge(self, cls):
        """A cheaper route wins even when every move on it carries the bias."""
        graph = Graph()
        nodes = {loc: Node(loc) for loc in [(0, 0), (1, 0), (0, 1), (1, 1)]}
        for node in nodes.values():
            graph.add_node(node)
        # Both moves on this route go against the preferred axis
        graph.add_edge(nodes[(0, 0)], nodes[(1, 0)], 1)
        graph.add_edge(nodes[(1, 0)], nodes[(1, 1)], 1)
        # Neither move on this route is charged, but it costs slightly more
        graph.add_edge(nodes[(0, 0)], nodes[(0, 1)], 1)
        graph.add_edge(nodes[(0, 1)], nodes[(1, 1)], 1.0015)

        path = cls(graph, straight_path_bias=0.001).find_nearest_path((0, 0), (1, 1))

        assert [node.location for node in path] == [(0, 0), (1, 0), (1, 1)]
        assert path_cost(graph, path) == 2.0

    @pytest.mark.parametrize("bias", [0.001, 0.6, 5.0])
    @pytest.mark.parametrize("cls", [UniformCostSearch, AStarSearch])
    def test_large_bias_still_optimal(self, cls, bias):
        """A bias summed over a long path larger than any cost gap changes ties only."""
        rng = np.random.default_rng(7)
        graph = build_grid_from_costs(rng.integers(1, 4, size=(20, 20)))
        start, goal = (0, 19), (19, 0)

        search = cls(graph, straight_path_bias=bias)
        path = search.find_nearest_path(start, goal)

        assert path_cost(graph, path) == reference_costs(graph, start)[Location(*goal)]

    @pytest.mark.parametrize("bias", [0.6, 5.0])
    def test_large_bias_flow_graph_is_shortest_tree(self, bias):
        """Every flow tree branch follows a minimum-cost route."""
        rng = np.random.default_rng(8)
        graph = build_grid_from_costs(rng.uniform(1.0, 2.0, size=(6, 6)))
        flow = UniformCostSearch(graph, straight_path_bias=bias).get_path_flow_graph((0, 0))
        dist = reference_costs(graph, (0, 0))

        for cell, parent in flow.items():
            if cell == parent:
                continue
            step = graph.get_cost(graph.get_node(parent), graph.get_node(cell))
            assert dist[parent] + step == pytest.approx(dist[cell], rel=1e-12)


class TestCostUnaware:
    """BFS and greedy search ignore costs and avoid blocked edges."""

    @pytest.mark.parametrize("name", ["bfs", "gbfs"])
    def test_manhattan_length_on_open_grid(self, grid5, name):
        """On a uniform grid the path has Manhattan-distance moves."""
        path = create_algorithm(name, grid5).find_nearest_path((0, 4), (4, 0))
        assert len(path) - 1 == 8

    @pytest.mark.parametrize("name", ["bfs", "gbfs"])
    def test_slow_cells_are_walls(self, walled_grid, name):
        """Edges costing more than 1 are never followed."""
        path = create_algorithm(name, walled_grid).find_nearest_path((0, 0), (4, 0))

        assert_valid_path(walled_grid, path, (0, 0), (4, 0))
        assert Location(2, 4) in [node.location for node in path]
        for current, following in zip(path, path[1:]):
            assert walled_grid.get_cost(current, following) <= 1

    def test_bfs_fewest_moves_around_wall(self, walled_grid):
        """BFS detours through the gap in 12 moves."""
        path = BreadthFirstSearch(walled_grid).find_nearest_path((0, 0), (4, 0))
        assert len(path) == 13

    def test_blocked_threshold_is_tunable(self, walled_grid):
        """Raising the threshold lets BFS cross slow cells."""
        path = BreadthFirstSearch(walled_grid, blocked_threshold=5).find_nearest_path((0, 0), (4, 0))
        assert len(path) == 5

    def test_unsorted_bfs_still_shortest(self, grid5):
        """Neighbor sorting changes tie-breaking only."""
        path = BreadthFirstSearch(grid5, sort_neighbors=False).find_nearest_path((0, 0), (3, 4))
        assert len(path) == 8

    def test_greedy_expands_few_nodes(self):
        """On an open grid greedy search heads straight for the goal."""
        graph = build_grid(10, 10)
        search = GreedyBestFirstSearch(graph)
        path = search.find_nearest_path((0, 0), (9, 9))
        assert len(search.visited) == len(path) - 1


class TestEdgeCosts:
    """Negative costs and the straight-path bias."""

    @pytest.mark.parametrize("name", ALGORITHMS)
    def test_negative_edges_are_impassable(self, name):
        """A negative edge is never traversed."""
        graph = Graph()
        a, b, c = Node((0, 0)), Node((1, 0)), Node((2, 0))
        for node in (a, b, c):
            graph.add_node(node)
        graph.add_edge(a, b, -1)
        graph.add_edge(b, c, 1)

        search = create_algorithm(name, graph)
        assert search.find_nearest_path((0, 0), (2, 0)) == []
        assert search.last_diagnostic.status == QueryStatus.UNREACHABLE

    def test_bias_checkerboard(self):
        """Even cells charge horizontal moves, odd cells vertical moves."""
        even, odd = Node((0, 0)), Node((1, 0))
        assert straight_path_bias(even, Node((1, 0)), 0.5) == 0.5
        assert straight_path_bias(even, Node((0, 1)), 0.5) == 0.0
        assert straight_path_bias(odd, Node((2, 0)), 0.5) == 0.0
        assert straight_path_bias(odd, Node((1, 1)), 0.5) == 0.5
        assert straight_path_bias(even, Node((1, 0)), 0) == 0.0

    @pytest.mark.parametrize("cls", [UniformCostSearch, AStarSearch])
    def test_bias_prefers_alternating_moves(self, grid3, cls):
        """Among equal-cost paths the biased search alternates axes."""
        path = cls(grid3).find_nearest_path((0, 0), (2, 2))
        assert [node.location for node in path] == [(0, 0), (0, 1), (1, 1), (1, 2), (2, 2)]

    @pytest.mark.parametrize("cls", [UniformCostSearch, AStarSearch])
    def test_negative_bias_rejected(self, grid3, cls):
        """The bias must be non-negative."""
        with pytest.raises(ValueError):
            cls(grid3, straight_path_bias=-0.1)
        with pytest.raises(ValueError):
            cls(grid3, straight_path_bias=float("nan"))

    def test_accumulated_cost_excludes_bias(self):
        """cost_so_far holds raw edge costs; the bias is tracked on its own."""
        graph = build_grid(3, 1)
        search = UniformCostSearch(graph, straight_path_bias=0.001)
        task = search.create_task((0, 0), (2, 0))
        while search.advance(task):
            pass

        assert task.cost_so_far[Location(2, 0)] == 2.0
        # Only the move out of the even cell (0, 0) is charged
        assert task.tie_break[Location(2, 0)] == pytest.approx(0.001)

    def test_negative_heuristic_weight_rejected(self, grid3):
        """The heuristic weight must be non-negative."""
        with pytest.raises(ValueError):
            AStarSearch(grid3, heuristic_weight=-1)

    def test_astar_expands_no_more_than_dijkstra(self):
        """The heuristic only prunes the search."""
        graph = build_grid(12, 12)
        dijkstra = UniformCostSearch(graph)
        astar = AStarSearch(graph)
        dijkstra.find_nearest_path((0, 11), (11, 0))
        astar.find_nearest_path((0, 11), (11, 0))
        assert len(astar.visited) <= len(dijkstra.visited)


class TestFlowGraph:
    """Test shortest-path trees."""

    @pytest.mark.parametrize("name", ["bfs", "dijkstra", "astar"])
    def test_tree_covers_reachable_cells(self, grid3, name):
        """Every cell maps to an adjacent predecessor; the start maps to itself."""
        search = create_algorithm(name, grid3)
        flow = search.get_path_flow_graph((0, 0))

        assert search.supports_flow_graph
        assert len(flow) == 9
        assert flow[Location(0, 0)] == Location(0, 0)
        for cell, parent in flow.items():
            if cell != (0, 0):
                assert cell.manhattan(parent) == 1

    @pytest.mark.parametrize("name", ["gbfs", "lpastar"])
    def test_no_tree(self, grid3, name):
        """Strategies without a flow tree return an empty map."""
        search = create_algorithm(name, grid3)
        assert not search.supports_flow_graph
        assert search.get_path_flow_graph((0, 0)) == {}

    @pytest.mark.parametrize("name", ["bfs", "dijkstra"])
    def test_unknown_start(self, grid3, name):
        """An unknown start gives an empty map."""
        assert create_algorithm(name, grid3).get_path_flow_graph((5, 5)) == {}

    def test_bfs_tree_skips_blocked_edges(self, walled_grid):
        """Cells reachable only through slow edges still appear once entered."""
        flow = BreadthFirstSearch(walled_grid).get_path_flow_graph((0, 0))
        assert len(flow) == 25


class TestDiagnostics:
    """Test internal-error reporting."""

    def test_broken_predecessors_report_internal_error(self, grid3):
        """A corrupted predecessor chain is an internal error, not unreachable."""

        class CorruptingSearch(UniformCostSearch):
            def _expand(self, task, current):
                super()._expand(task, current)
                if task.goal_node.location in task.came_from:
                    task.came_from[task.goal_node.location] = Location(99, 99)

        search = CorruptingSearch(grid3)
        assert search.find_nearest_path((0, 0), (2, 2)) == []
        assert search.last_diagnostic.status == QueryStatus.INTERNAL_ERROR

    def test_missing_predecessor_raises(self, grid3):
        """reconstruct_path refuses a chain that never reaches the start."""
        from gridsearch.errors import PathReconstructionError

        search = UniformCostSearch(grid3)
        start, goal = grid3.get_node((0, 0)), grid3.get_node((2, 0))
        with pytest.raises(PathReconstructionError):
            search.reconstruct_path({goal.location: Location(1, 0)}, start, goal)

    def test_lpa_star_type(self, grid3):
        """The registry builds the incremental engine for 'lpastar'."""
        assert isinstance(create_algorithm("lpastar", grid3), LPAStarSearch)
