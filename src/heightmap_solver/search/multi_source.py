"""Multi-source search: shortest path to the goal from any eligible start.

Runs one independent A* search per eligible start cell and keeps the
cheapest successful one. Searches share nothing but the read-only height
map, so they may optionally run on a thread pool.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from heightmap_solver.core.data_models import HeightMap, Cell, Elevation, MIN_ELEVATION
from heightmap_solver.search.astar import AStarSearcher, SearchResult
from heightmap_solver.search.neighbors import AdmissibilityPredicate, first_step_climb

logger = logging.getLogger(__name__)

StartPredicate = Callable[[Elevation], bool]


def elevation_equals(level: Elevation) -> StartPredicate:
    """Start predicate accepting cells at exactly ``level``."""
    def predicate(elevation: Elevation) -> bool:
        return elevation == level
    return predicate


is_lowest = elevation_equals(MIN_ELEVATION)


def eligible_starts(height_map: HeightMap, start_predicate: StartPredicate) -> List[Cell]:
    """Cells whose elevation satisfies ``start_predicate``, in row-major order."""
    return [cell for cell in height_map.cells() if start_predicate(height_map.elevation(cell))]


@dataclass
class MultiSourceResult:
    """Result from a multi-source search."""
    success: bool
    goal: Cell
    cost: Optional[int] = None
    start: Optional[Cell] = None
    path: List[Cell] = field(default_factory=list)
    eligible_starts: int = 0
    searches_run: int = 0
    successful_searches: int = 0
    nodes_expanded: int = 0
    computation_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-friendly dictionary."""
        return {
            'success': self.success,
            'goal': list(self.goal),
            'cost': self.cost,
            'start': list(self.start) if self.start is not None else None,
            'path': [list(cell) for cell in self.path],
            'eligible_starts': self.eligible_starts,
            'searches_run': self.searches_run,
            'successful_searches': self.successful_searches,
            'nodes_expanded': self.nodes_expanded,
            'computation_time': self.computation_time,
        }


class MultiSourceRunner:
    """Repeats A* from every eligible start and keeps the minimum."""

    def __init__(self, searcher: Optional[AStarSearcher] = None, max_workers: int = 1):
        """Initialize runner.

        Args:
            searcher: Searcher used for every start (default configuration if None)
            max_workers: Threads used to run independent searches; 1 runs them in order
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.searcher = searcher or AStarSearcher()
        self.max_workers = max_workers

    def find_minimum(self, height_map: HeightMap,
                     start_predicate: StartPredicate = is_lowest,
                     admissible: AdmissibilityPredicate = first_step_climb) -> MultiSourceResult:
        """Find the cheapest path to the goal from any eligible start.

        Args:
            height_map: Map to search
            start_predicate: Predicate on a cell's elevation selecting start cells
            admissible: Predicate on (from_elevation, to_elevation) gating each step

        Returns:
            MultiSourceResult; ``success`` is False only if every search failed
        """
        start_time = time.perf_counter()
        starts = eligible_starts(height_map, start_predicate)
        logger.info(f"Searching from {len(starts)} eligible start cells to {height_map.goal}")

        results = self._run_searches(height_map, starts, admissible)

        # Strict comparison keeps the earliest start in row-major order on ties
        best: Optional[SearchResult] = None
        successful = 0
        nodes_expanded = 0
        for result in results:
            nodes_expanded += result.nodes_expanded
            if not result.success:
                continue
            successful += 1
            if best is None or result.cost < best.cost:
                best = result

        computation_time = time.perf_counter() - start_time

        if best is None:
            logger.info(f"No eligible start reaches {height_map.goal}")
            return MultiSourceResult(
                success=False,
                goal=height_map.goal,
                eligible_starts=len(starts),
                searches_run=len(results),
                nodes_expanded=nodes_expanded,
                computation_time=computation_time,
            )

        logger.info(f"Minimum cost {best.cost} from {best.start} "
                    f"({successful}/{len(results)} starts reach the goal)")
        return MultiSourceResult(
            success=True,
            goal=height_map.goal,
            cost=best.cost,
            start=best.start,
            path=best.path,
            eligible_starts=len(starts),
            searches_run=len(results),
            successful_searches=successful,
            nodes_expanded=nodes_expanded,
            computation_time=computation_time,
        )

    def _run_searches(self, height_map: HeightMap, starts: List[Cell],
                      admissible: AdmissibilityPredicate) -> List[SearchResult]:
        """Run one search per start; results come back in ``starts`` order."""
        def run(start: Cell) -> SearchResult:
            return self.searcher.search(height_map, admissible, start=start)

        if self.max_workers == 1 or len(starts) <= 1:
            return [run(start) for start in starts]

        logger.debug(f"Running {len(starts)} searches on {self.max_workers} threads")
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(run, starts))
