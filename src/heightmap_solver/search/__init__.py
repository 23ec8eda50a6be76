"""Search algorithms for the heightmap solver.

This module implements A* shortest-path search over a 4-connected height
map, plus a multi-source runner that finds the cheapest path from any
eligible start cell.
"""

from .neighbors import (
    NeighborExpander, climb_at_most_one, first_step_climb, get_admissibility_rule
)
from .heuristics import ChebyshevHeuristic, ManhattanHeuristic, ZeroHeuristic, create_heuristic
from .frontier import CostLedger, PriorityFrontier, SearchNode
from .astar import AStarSearcher, SearchResult, SearchConfig, create_astar_searcher
from .multi_source import MultiSourceRunner, MultiSourceResult, eligible_starts, elevation_equals
from .bfs import breadth_first_cost, reverse_minimum

__all__ = [
    'NeighborExpander',
    'climb_at_most_one',
    'first_step_climb',
    'get_admissibility_rule',
    'ChebyshevHeuristic',
    'ManhattanHeuristic',
    'ZeroHeuristic',
    'create_heuristic',
    'CostLedger',
    'PriorityFrontier',
    'SearchNode',
    'AStarSearcher',
    'SearchResult',
    'SearchConfig',
    'create_astar_searcher',
    'MultiSourceRunner',
    'MultiSourceResult',
    'eligible_starts',
    'elevation_equals',
    'breadth_first_cost',
    'reverse_minimum',
]
