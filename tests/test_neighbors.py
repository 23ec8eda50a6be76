"""Tests for neighbor expansion and admissibility rules."""

import pytest

from heightmap_solver.core.data_models import HeightMap
from heightmap_solver.search.neighbors import (
    NeighborExpander, climb_at_most_one, first_step_climb, get_admissibility_rule,
    ADMISSIBILITY_RULES, DIRECTIONS
)


class TestAdmissibilityRules:
    """Test the climbing predicates."""

    def test_climb_at_most_one(self):
        assert climb_at_most_one(0, 1)
        assert climb_at_most_one(4, 4)
        assert climb_at_most_one(25, 0)
        assert not climb_at_most_one(0, 2)
        assert not climb_at_most_one(10, 25)

    @pytest.mark.parametrize("from_elevation,to_elevation,allowed", [
        (0, 1, True),
        (0, 0, False),
        (0, 2, False),
        (1, 0, False),
        (1, 1, True),
        (1, 2, True),
        (5, 3, True),
        (3, 5, False),
    ])
    def test_first_step_climb(self, from_elevation, to_elevation, allowed):
        assert first_step_climb(from_elevation, to_elevation) is allowed

    def test_rule_lookup(self):
        assert get_admissibility_rule('climb') is climb_at_most_one
        assert get_admissibility_rule('first-step') is first_step_climb
        assert set(ADMISSIBILITY_RULES) == {'climb', 'first-step'}

    def test_unknown_rule(self):
        with pytest.raises(ValueError, match="Unknown admissibility rule"):
            get_admissibility_rule('teleport')


class TestNeighborExpander:
    """Test neighbor generation on the sample map."""

    @pytest.fixture
    def expander(self, sample_map):
        return NeighborExpander(sample_map)

    def test_direction_order(self):
        assert DIRECTIONS == ((1, 0), (0, 1), (-1, 0), (0, -1))

    def test_corner_cell(self, expander):
        """Out-of-bounds candidates are never produced."""
        assert expander.neighbors((0, 0), climb_at_most_one) == [((1, 0), 1), ((0, 1), 1)]

    def test_blocked_climb(self, expander):
        # (2, 1) is 'c'; its +x neighbor 'r' is too high
        assert expander.neighbors((2, 1), climb_at_most_one) == [
            ((2, 2), 1), ((1, 1), 1), ((2, 0), 1)
        ]

    def test_bounds_checked_before_predicate(self, expander):
        calls = []

        def recording(from_elevation, to_elevation):
            calls.append((from_elevation, to_elevation))
            return True

        expander.neighbors((0, 0), recording)
        assert len(calls) == 2

    def test_first_step_from_lowest(self, expander):
        """Cells at the lowest level cannot move onto other lowest cells."""
        assert expander.neighbors((0, 0), first_step_climb) == []
        # (0, 4) is 'a' with 'b' to its right
        assert expander.neighbors((0, 4), first_step_climb) == [((1, 4), 1)]

    def test_predecessors(self, expander):
        # Every neighbor of (1, 1) ('b') is at most 'c'
        predecessors = expander.predecessors((1, 1), climb_at_most_one)
        assert [cell for cell, _ in predecessors] == [(2, 1), (1, 2), (0, 1), (1, 0)]

    def test_predecessors_mirror_neighbors(self, sample_map, expander):
        """v lists u as predecessor exactly when u lists v as neighbor."""
        for cell in sample_map.cells():
            for rule in (climb_at_most_one, first_step_climb):
                for predecessor, _ in expander.predecessors(cell, rule):
                    assert (cell, 1) in expander.neighbors(predecessor, rule)

    def test_two_cell_map(self):
        height_map = HeightMap.build(["S", "E"])
        expander = NeighborExpander(height_map)
        # 'S' is 0 and 'E' is 25
        assert expander.neighbors((0, 0), climb_at_most_one) == []
        assert expander.neighbors((0, 1), climb_at_most_one) == [((0, 0), 1)]
