"""Breadth-first searches over a height map.

``breadth_first_cost`` is the exhaustive reference for A* results.
``reverse_minimum`` answers the multi-source question with a single
search from the goal over reversed edges instead of one search per start.
"""

from collections import deque
from typing import Deque, Dict, Optional, Tuple

from heightmap_solver.core.data_models import HeightMap, Cell
from heightmap_solver.search.neighbors import (
    AdmissibilityPredicate, NeighborExpander, climb_at_most_one, first_step_climb
)
from heightmap_solver.search.multi_source import StartPredicate, is_lowest


def breadth_first_cost(
    height_map: HeightMap,
    admissible: AdmissibilityPredicate = climb_at_most_one,
    start: Optional[Cell] = None,
    goal: Optional[Cell] = None,
) -> Optional[int]:
    """Minimum number of steps from ``start`` to ``goal``, or None if unreachable."""
    start = height_map.start if start is None else start
    goal = height_map.goal if goal is None else goal
    expander = NeighborExpander(height_map)

    distances: Dict[Cell, int] = {start: 0}
    queue: Deque[Cell] = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == goal:
            return distances[cell]
        for neighbor, _ in expander.neighbors(cell, admissible):
            if neighbor not in distances:
                distances[neighbor] = distances[cell] + 1
                queue.append(neighbor)
    return None


def reverse_minimum(
    height_map: HeightMap,
    start_predicate: StartPredicate = is_lowest,
    admissible: AdmissibilityPredicate = first_step_climb,
) -> Optional[Tuple[int, Cell]]:
    """Cheapest (cost, start) over all eligible starts, found from the goal.

    A cell ``u`` is expanded from ``v`` when ``admissible(elev(u), elev(v))``
    holds, i.e. along forward edges walked backwards. The first eligible
    cell dequeued is the nearest one.
    """
    expander = NeighborExpander(height_map)
    goal = height_map.goal

    distances: Dict[Cell, int] = {goal: 0}
    queue: Deque[Cell] = deque([goal])
    while queue:
        cell = queue.popleft()
        if start_predicate(height_map.elevation(cell)):
            return distances[cell], cell
        for predecessor, _ in expander.predecessors(cell, admissible):
            if predecessor not in distances:
                distances[predecessor] = distances[cell] + 1
                queue.append(predecessor)
    return None
