"""Tests for distance heuristics."""

import pytest

from heightmap_solver.search.heuristics import (
    BaseHeuristic, ChebyshevHeuristic, ManhattanHeuristic, ZeroHeuristic,
    HEURISTICS, create_heuristic
)
from heightmap_solver.search.bfs import breadth_first_cost
from heightmap_solver.search.neighbors import climb_at_most_one


class TestHeuristicValues:
    """Test heuristic estimates against the goal (5, 2)."""

    GOAL = (5, 2)

    def test_chebyshev(self):
        heuristic = ChebyshevHeuristic(self.GOAL)
        assert heuristic((0, 0)) == 5
        assert heuristic((5, 0)) == 2
        assert heuristic(self.GOAL) == 0

    def test_manhattan(self):
        heuristic = ManhattanHeuristic(self.GOAL)
        assert heuristic((0, 0)) == 7
        assert heuristic((7, 4)) == 4
        assert heuristic(self.GOAL) == 0

    def test_zero(self):
        heuristic = ZeroHeuristic(self.GOAL)
        assert heuristic((0, 0)) == 0
        assert heuristic((7, 4)) == 0

    def test_ordering(self, sample_map):
        """zero <= chebyshev <= manhattan everywhere."""
        zero = ZeroHeuristic(sample_map.goal)
        chebyshev = ChebyshevHeuristic(sample_map.goal)
        manhattan = ManhattanHeuristic(sample_map.goal)
        for cell in sample_map.cells():
            assert zero(cell) <= chebyshev(cell) <= manhattan(cell)

    def test_admissible_on_sample(self, sample_map):
        """No estimate exceeds the true remaining cost."""
        for cell in sample_map.cells():
            true_cost = breadth_first_cost(sample_map, climb_at_most_one, start=cell)
            if true_cost is None:
                continue
            for heuristic_cls in HEURISTICS.values():
                assert heuristic_cls(sample_map.goal)(cell) <= true_cost

    def test_consistent(self):
        """Estimates drop by at most one per orthogonal step."""
        heuristic = ChebyshevHeuristic((3, 3))
        for x in range(7):
            for y in range(7):
                for dx, dy in ((1, 0), (0, 1), (-1, 0), (0, -1)):
                    assert heuristic((x, y)) <= 1 + heuristic((x + dx, y + dy))


class TestHeuristicFactory:
    """Test heuristic creation and statistics."""

    def test_create_each(self):
        for name, heuristic_cls in HEURISTICS.items():
            heuristic = create_heuristic(name, (1, 1))
            assert isinstance(heuristic, heuristic_cls)
            assert isinstance(heuristic, BaseHeuristic)
            assert heuristic.name == name

    def test_unknown_heuristic(self):
        with pytest.raises(ValueError, match="Unknown heuristic"):
            create_heuristic('euclidean', (0, 0))

    def test_computation_count(self):
        heuristic = create_heuristic('manhattan', (0, 0))
        heuristic((1, 1))
        heuristic((2, 2))

        stats = heuristic.get_stats()
        assert stats['name'] == 'manhattan'
        assert stats['computation_count'] == 2

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            BaseHeuristic((0, 0))
