"""A* search over a height map.

This module implements single-source A* with an admissible distance
heuristic, a FIFO-stable priority frontier and lazy removal of stale
frontier entries. Edge admissibility is decided per call by a predicate
on (from_elevation, to_elevation).
"""

import time
import logging
from typing import Optional, List, Dict, Any
from dataclasses import dataclass, field

from heightmap_solver.core.data_models import HeightMap, Cell, OutOfBoundsError
from heightmap_solver.search.frontier import CostLedger, PriorityFrontier, SearchNode
from heightmap_solver.search.heuristics import HEURISTICS, create_heuristic
from heightmap_solver.search.neighbors import (
    AdmissibilityPredicate, NeighborExpander, climb_at_most_one
)

logger = logging.getLogger(__name__)

# Termination reasons
GOAL_REACHED = "goal_reached"
NO_PATH = "no_path"
MAX_NODES_REACHED = "max_nodes_reached"


@dataclass
class SearchStatistics:
    """Counters collected during one search."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    stale_nodes_skipped: int = 0
    max_frontier_size: int = 0
    heuristic_computations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'stale_nodes_skipped': self.stale_nodes_skipped,
            'max_frontier_size': self.max_frontier_size,
            'heuristic_computations': self.heuristic_computations,
        }


@dataclass
class SearchResult:
    """Result from A* search.

    A missing path is a normal outcome: ``success`` is False, ``cost`` is
    None and ``path`` is empty.
    """
    success: bool
    start: Cell
    goal: Cell
    path: List[Cell] = field(default_factory=list)
    cost: Optional[int] = None
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    statistics: SearchStatistics = field(default_factory=SearchStatistics)

    @property
    def nodes_expanded(self) -> int:
        return self.statistics.nodes_expanded

    @property
    def nodes_generated(self) -> int:
        return self.statistics.nodes_generated

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-friendly dictionary."""
        return {
            'success': self.success,
            'start': list(self.start),
            'goal': list(self.goal),
            'cost': self.cost,
            'path': [list(cell) for cell in self.path],
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'search_stats': self.statistics.to_dict(),
        }


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    heuristic: str = "chebyshev"  # chebyshev | manhattan | zero
    max_nodes_expanded: Optional[int] = None  # None means no expansion budget

    def __post_init__(self) -> None:
        if self.heuristic not in HEURISTICS:
            raise ValueError(
                f"Unknown heuristic '{self.heuristic}', expected one of {sorted(HEURISTICS)}"
            )
        if self.max_nodes_expanded is not None and self.max_nodes_expanded <= 0:
            raise ValueError(
                f"max_nodes_expanded must be positive or None, got {self.max_nodes_expanded}"
            )


class AStarSearcher:
    """A* shortest-path search on a 4-connected height map.

    The searcher holds configuration only. Ledger, frontier and statistics
    are created inside each :meth:`search` call, so one searcher can be
    used for many independent searches, including from several threads.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        logger.debug(f"A* searcher initialized with heuristic={self.config.heuristic}, "
                     f"max_nodes_expanded={self.config.max_nodes_expanded}")

    def search(self, height_map: HeightMap,
               admissible: AdmissibilityPredicate = climb_at_most_one,
               start: Optional[Cell] = None,
               goal: Optional[Cell] = None) -> SearchResult:
        """Find a shortest path from ``start`` to ``goal``.

        Args:
            height_map: Map to search
            admissible: Predicate on (from_elevation, to_elevation) gating each step
            start: Start cell, defaults to the map's start marker
            goal: Goal cell, defaults to the map's goal marker

        Returns:
            SearchResult with the path and its cost, or a no-path result

        Raises:
            OutOfBoundsError: If ``start`` or ``goal`` is outside the map
        """
        start_time = time.perf_counter()
        start = height_map.start if start is None else start
        goal = height_map.goal if goal is None else goal

        for name, cell in (('start', start), ('goal', goal)):
            if not height_map.in_bounds(cell):
                raise OutOfBoundsError(f"{name} cell {cell} is outside the map")

        logger.debug(f"Starting A* search: {start} -> {goal}")

        statistics = SearchStatistics()
        heuristic = create_heuristic(self.config.heuristic, goal)
        expander = NeighborExpander(height_map)
        ledger = CostLedger()
        frontier = PriorityFrontier()

        ledger.record(start, 0, None)
        frontier.push(SearchNode(start, 0, heuristic(start)))
        statistics.nodes_generated = 1

        max_nodes = self.config.max_nodes_expanded
        termination_reason = NO_PATH

        while frontier:
            current = frontier.pop()

            # Superseded by a cheaper entry pushed later; drop it lazily
            if ledger.is_stale(current):
                statistics.stale_nodes_skipped += 1
                continue

            if current.cell == goal:
                path = ledger.reconstruct_path(goal)
                statistics.max_frontier_size = frontier.max_size
                statistics.heuristic_computations = heuristic.computation_count
                computation_time = time.perf_counter() - start_time
                logger.debug(f"Goal {goal} reached from {start} with cost {len(path) - 1} "
                             f"after {statistics.nodes_expanded} expansions")
                return SearchResult(
                    success=True,
                    start=start,
                    goal=goal,
                    path=path,
                    cost=len(path) - 1,
                    computation_time=computation_time,
                    termination_reason=GOAL_REACHED,
                    statistics=statistics,
                )

            if max_nodes is not None and statistics.nodes_expanded >= max_nodes:
                termination_reason = MAX_NODES_REACHED
                break

            statistics.nodes_expanded += 1

            for neighbor, step_cost in expander.neighbors(current.cell, admissible):
                tentative_cost = current.cost + step_cost
                if ledger.improves(neighbor, tentative_cost):
                    ledger.record(neighbor, tentative_cost, current.cell)
                    frontier.push(SearchNode(neighbor, tentative_cost, heuristic(neighbor)))
                    statistics.nodes_generated += 1

        statistics.max_frontier_size = frontier.max_size
        statistics.heuristic_computations = heuristic.computation_count
        computation_time = time.perf_counter() - start_time

        if termination_reason == MAX_NODES_REACHED:
            logger.info(f"A* search {start} -> {goal} stopped after {max_nodes} expansions")
        else:
            logger.debug(f"No path from {start} to {goal} "
                         f"({statistics.nodes_expanded} cells reachable)")

        return SearchResult(
            success=False,
            start=start,
            goal=goal,
            computation_time=computation_time,
            termination_reason=termination_reason,
            statistics=statistics,
        )


def create_astar_searcher(heuristic: str = "chebyshev",
                          max_nodes_expanded: Optional[int] = None) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        heuristic: Heuristic name ('chebyshev', 'manhattan' or 'zero')
        max_nodes_expanded: Expansion budget, None for unlimited

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        heuristic=heuristic,
        max_nodes_expanded=max_nodes_expanded,
    )

    return AStarSearcher(config)
