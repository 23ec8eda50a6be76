"""Per-search bookkeeping: best-cost ledger and priority frontier."""

import heapq
import itertools
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from heightmap_solver.core.data_models import Cell


@dataclass(frozen=True)
class SearchNode:
    """Entry in the A* frontier."""
    cell: Cell
    cost: int  # g(n) - steps from the start
    heuristic: int  # h(n) - estimate to the goal

    @property
    def f_score(self) -> int:
        """Total estimated cost f(n) = g(n) + h(n)."""
        return self.cost + self.heuristic


class CostLedger:
    """Best known cost and predecessor for every cell reached so far.

    Recorded costs only ever decrease for a given cell during one search.
    """

    def __init__(self):
        self._costs: Dict[Cell, int] = {}
        self._predecessors: Dict[Cell, Optional[Cell]] = {}

    def __contains__(self, cell: Cell) -> bool:
        return cell in self._costs

    def __len__(self) -> int:
        return len(self._costs)

    def best_cost(self, cell: Cell) -> Optional[int]:
        """Best recorded cost for ``cell``, or None if unseen."""
        return self._costs.get(cell)

    def improves(self, cell: Cell, cost: int) -> bool:
        """Whether ``cost`` is strictly better than what is recorded."""
        best = self._costs.get(cell)
        return best is None or cost < best

    def is_stale(self, node: SearchNode) -> bool:
        """Whether a popped node has been superseded by a cheaper path."""
        best = self._costs.get(node.cell)
        return best is not None and node.cost > best

    def record(self, cell: Cell, cost: int, predecessor: Optional[Cell]) -> None:
        """Record a strictly better cost for ``cell``.

        Raises:
            ValueError: If ``cost`` does not improve on the recorded cost
        """
        if not self.improves(cell, cost):
            raise ValueError(
                f"Cost {cost} for {cell} does not improve on {self._costs[cell]}"
            )
        self._costs[cell] = cost
        self._predecessors[cell] = predecessor

    def predecessor(self, cell: Cell) -> Optional[Cell]:
        return self._predecessors.get(cell)

    def reconstruct_path(self, cell: Cell) -> List[Cell]:
        """Walk predecessor links back to the origin and return origin..cell."""
        if cell not in self._costs:
            raise KeyError(f"No path recorded to {cell}")
        path = [cell]
        current = self._predecessors[cell]
        while current is not None:
            path.append(current)
            current = self._predecessors[current]
        return list(reversed(path))


class PriorityFrontier:
    """Min-heap of search nodes ordered by f-score, FIFO among equal f-scores."""

    def __init__(self):
        self._heap: List[Tuple[int, int, SearchNode]] = []
        self._counter = itertools.count()
        self.max_size = 0

    def push(self, node: SearchNode) -> None:
        # The insertion counter is unique, so nodes themselves are never compared
        heapq.heappush(self._heap, (node.f_score, next(self._counter), node))
        if len(self._heap) > self.max_size:
            self.max_size = len(self._heap)

    def pop(self) -> SearchNode:
        """Remove and return the node with the lowest f-score.

        Raises:
            IndexError: If the frontier is empty
        """
        if not self._heap:
            raise IndexError("pop from empty frontier")
        return heapq.heappop(self._heap)[2]

    def peek(self) -> SearchNode:
        if not self._heap:
            raise IndexError("peek at empty frontier")
        return self._heap[0][2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[SearchNode]:
        """Iterate over queued nodes in pop order without consuming them."""
        return (entry[2] for entry in sorted(self._heap))
