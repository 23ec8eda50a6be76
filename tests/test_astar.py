"""Tests for A* search algorithm."""

import json

import numpy as np
import pytest

from heightmap_solver.core.data_models import HeightMap, OutOfBoundsError
from heightmap_solver.search.astar import (
    AStarSearcher, SearchResult, SearchConfig, create_astar_searcher,
    GOAL_REACHED, NO_PATH, MAX_NODES_REACHED
)
from heightmap_solver.search.bfs import breadth_first_cost
from heightmap_solver.search.neighbors import climb_at_most_one, first_step_climb


def assert_valid_path(height_map, path, admissible):
    """Every step is orthogonal, in bounds and admissible."""
    for (x, y), (nx, ny) in zip(path, path[1:]):
        assert abs(nx - x) + abs(ny - y) == 1
        assert height_map.in_bounds((nx, ny))
        assert admissible(height_map.elevation((x, y)), height_map.elevation((nx, ny)))


class TestSearchConfig:
    """Test SearchConfig validation."""

    def test_default_config(self):
        config = SearchConfig()
        assert config.heuristic == "chebyshev"
        assert config.max_nodes_expanded is None

    def test_custom_config(self):
        config = SearchConfig(heuristic="manhattan", max_nodes_expanded=50)
        assert config.heuristic == "manhattan"
        assert config.max_nodes_expanded == 50

    def test_invalid_heuristic(self):
        with pytest.raises(ValueError):
            SearchConfig(heuristic="euclidean")

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            SearchConfig(max_nodes_expanded=0)


class TestAStarSearcher:
    """Test A* searcher on the sample map."""

    @pytest.fixture
    def searcher(self):
        return AStarSearcher()

    def test_sample_cost(self, searcher, sample_map):
        result = searcher.search(sample_map)

        assert isinstance(result, SearchResult)
        assert result.success
        assert result.cost == 31
        assert result.termination_reason == GOAL_REACHED
        assert result.start == sample_map.start
        assert result.goal == sample_map.goal

    def test_path_is_valid(self, searcher, sample_map):
        result = searcher.search(sample_map)

        assert result.path[0] == sample_map.start
        assert result.path[-1] == sample_map.goal
        assert result.cost == len(result.path) - 1
        assert_valid_path(sample_map, result.path, climb_at_most_one)

    @pytest.mark.parametrize("heuristic", ["chebyshev", "manhattan", "zero"])
    def test_cost_independent_of_heuristic(self, sample_map, heuristic):
        result = create_astar_searcher(heuristic=heuristic).search(sample_map)
        assert result.cost == 31

    def test_start_is_goal(self, searcher, sample_map):
        result = searcher.search(sample_map, start=sample_map.goal)
        assert result.success
        assert result.cost == 0
        assert result.path == [sample_map.goal]

    def test_custom_endpoints(self, searcher, sample_map):
        result = searcher.search(sample_map, start=(0, 0), goal=(2, 2))
        assert result.success
        assert result.cost == 4

    def test_no_path(self, searcher, unreachable_map):
        result = searcher.search(unreachable_map)

        assert not result.success
        assert result.cost is None
        assert result.path == []
        assert result.termination_reason == NO_PATH

    def test_first_step_rule_from_marker(self, searcher, sample_map):
        """Both neighbors of S are lowest cells, so nothing is admissible."""
        result = searcher.search(sample_map, first_step_climb)
        assert not result.success
        assert result.nodes_expanded == 1

    def test_out_of_bounds_endpoints(self, searcher, sample_map):
        with pytest.raises(OutOfBoundsError):
            searcher.search(sample_map, start=(8, 0))
        with pytest.raises(OutOfBoundsError):
            searcher.search(sample_map, goal=(0, -1))

    def test_deterministic(self, sample_map):
        first = AStarSearcher().search(sample_map)
        searcher = AStarSearcher()
        second = searcher.search(sample_map)
        third = searcher.search(sample_map)

        assert first.path == second.path == third.path
        assert first.nodes_expanded == second.nodes_expanded == third.nodes_expanded

    def test_search_statistics(self, searcher, sample_map):
        result = searcher.search(sample_map)
        stats = result.statistics

        assert stats.nodes_expanded > 0
        assert stats.nodes_generated >= stats.nodes_expanded
        assert stats.max_frontier_size > 0
        assert stats.heuristic_computations == stats.nodes_generated
        assert result.computation_time >= 0

    def test_to_dict_is_json_serializable(self, searcher, sample_map):
        data = searcher.search(sample_map).to_dict()
        decoded = json.loads(json.dumps(data))

        assert decoded['cost'] == 31
        assert decoded['start'] == [0, 0]
        assert decoded['goal'] == [5, 2]
        assert len(decoded['path']) == 32
        assert decoded['search_stats']['nodes_expanded'] > 0


class TestExpansionBudget:
    """Test the max_nodes_expanded limit."""

    def test_budget_exhausted(self, sample_map):
        result = create_astar_searcher(max_nodes_expanded=1).search(sample_map)

        assert not result.success
        assert result.termination_reason == MAX_NODES_REACHED
        assert result.nodes_expanded == 1
        assert result.cost is None

    def test_goal_reached_exactly_at_budget(self, sample_map):
        needed = AStarSearcher().search(sample_map).nodes_expanded
        result = create_astar_searcher(max_nodes_expanded=needed).search(sample_map)

        assert result.success
        assert result.cost == 31

    def test_generous_budget(self, sample_map):
        result = create_astar_searcher(max_nodes_expanded=10000).search(sample_map)
        assert result.success


class TestAgainstBreadthFirst:
    """A* costs agree with exhaustive breadth-first search."""

    @pytest.mark.parametrize("seed", range(8))
    @pytest.mark.parametrize("admissible", [climb_at_most_one, first_step_climb])
    def test_random_maps(self, seed, admissible):
        rng = np.random.default_rng(seed)
        height_map = HeightMap(elevations=rng.integers(0, 4, size=(6, 7)),
                               start=(0, 0), goal=(6, 5))
        # The marker goal is forced to the top level, so aim elsewhere
        goal = (4, 3)

        expected = breadth_first_cost(height_map, admissible, goal=goal)
        for heuristic in ("chebyshev", "manhattan", "zero"):
            result = create_astar_searcher(heuristic=heuristic).search(
                height_map, admissible, goal=goal
            )
            assert result.cost == expected
            if result.success:
                assert_valid_path(height_map, result.path, admissible)

    def test_sample_map(self, sample_map):
        assert breadth_first_cost(sample_map) == 31
        assert breadth_first_cost(sample_map, first_step_climb) is None
