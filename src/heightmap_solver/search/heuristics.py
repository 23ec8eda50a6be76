"""Distance heuristics for A* search on a 4-connected grid.

Every heuristic here is admissible when moves are orthogonal with unit
cost: the true remaining cost is at least the Manhattan distance, which
is at least the Chebyshev distance, which is at least zero.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Type

from heightmap_solver.core.data_models import Cell

logger = logging.getLogger(__name__)


class BaseHeuristic(ABC):
    """Abstract base class for goal-distance heuristics."""

    name = 'base'

    def __init__(self, goal: Cell):
        """Initialize heuristic.

        Args:
            goal: Cell the estimate is measured against
        """
        self.goal = goal
        self.computation_count = 0

    @abstractmethod
    def compute(self, cell: Cell) -> int:
        """Lower bound on the number of steps from ``cell`` to the goal."""
        pass

    def __call__(self, cell: Cell) -> int:
        """Compute heuristic and count the evaluation."""
        self.computation_count += 1
        return self.compute(cell)

    def get_stats(self) -> Dict[str, Any]:
        """Get computation statistics."""
        return {
            'name': self.name,
            'computation_count': self.computation_count,
        }


class ChebyshevHeuristic(BaseHeuristic):
    """max(|dx|, |dy|) to the goal.

    Looser than Manhattan distance on a 4-connected grid but still
    admissible, so returned path costs are unchanged.
    """

    name = 'chebyshev'

    def compute(self, cell: Cell) -> int:
        return max(abs(cell[0] - self.goal[0]), abs(cell[1] - self.goal[1]))


class ManhattanHeuristic(BaseHeuristic):
    """|dx| + |dy| to the goal; the tightest bound for orthogonal moves."""

    name = 'manhattan'

    def compute(self, cell: Cell) -> int:
        return abs(cell[0] - self.goal[0]) + abs(cell[1] - self.goal[1])


class ZeroHeuristic(BaseHeuristic):
    """Always 0; reduces A* to uniform-cost search."""

    name = 'zero'

    def compute(self, cell: Cell) -> int:
        return 0


HEURISTICS: Dict[str, Type[BaseHeuristic]] = {
    ChebyshevHeuristic.name: ChebyshevHeuristic,
    ManhattanHeuristic.name: ManhattanHeuristic,
    ZeroHeuristic.name: ZeroHeuristic,
}


def create_heuristic(name: str, goal: Cell) -> BaseHeuristic:
    """Factory function to create a heuristic by name.

    Args:
        name: One of 'chebyshev', 'manhattan', 'zero'
        goal: Goal cell

    Returns:
        Heuristic bound to ``goal``

    Raises:
        ValueError: If the name is unknown
    """
    try:
        heuristic_cls = HEURISTICS[name]
    except KeyError:
        raise ValueError(
            f"Unknown heuristic '{name}', expected one of {sorted(HEURISTICS)}"
        ) from None

    logger.debug(f"Created {name} heuristic for goal {goal}")
    return heuristic_cls(goal)
