"""Neighbor expansion and admissibility rules for 4-connected height maps."""

from typing import Callable, Dict, List, Tuple

from heightmap_solver.core.data_models import HeightMap, Cell, Elevation, MIN_ELEVATION

# Admissibility predicate: (from_elevation, to_elevation) -> traversal allowed
AdmissibilityPredicate = Callable[[Elevation, Elevation], bool]

# Fixed expansion order: +x, +y, -x, -y. Downstream tie-breaking depends on it.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))

UNIT_COST = 1


def climb_at_most_one(from_elevation: Elevation, to_elevation: Elevation) -> bool:
    """Allow any descent and a climb of at most one level."""
    return to_elevation - from_elevation <= 1


def first_step_climb(from_elevation: Elevation, to_elevation: Elevation) -> bool:
    """Climbing rule used when searching from every lowest cell.

    Leaving a lowest cell is only allowed onto the next level up, and a
    cell one level up never steps back down to the lowest level. All
    other moves follow :func:`climb_at_most_one`.
    """
    if from_elevation == MIN_ELEVATION:
        return to_elevation == MIN_ELEVATION + 1
    if from_elevation == MIN_ELEVATION + 1 and to_elevation == MIN_ELEVATION:
        return False
    return climb_at_most_one(from_elevation, to_elevation)


ADMISSIBILITY_RULES: Dict[str, AdmissibilityPredicate] = {
    'climb': climb_at_most_one,
    'first-step': first_step_climb,
}


def get_admissibility_rule(name: str) -> AdmissibilityPredicate:
    """Look up a named admissibility rule.

    Raises:
        ValueError: If no rule has that name
    """
    try:
        return ADMISSIBILITY_RULES[name]
    except KeyError:
        raise ValueError(
            f"Unknown admissibility rule '{name}', expected one of {sorted(ADMISSIBILITY_RULES)}"
        ) from None


class NeighborExpander:
    """Yields admissible orthogonal neighbors of a cell with unit edge cost."""

    def __init__(self, height_map: HeightMap):
        self.height_map = height_map

    def neighbors(self, cell: Cell,
                  admissible: AdmissibilityPredicate) -> List[Tuple[Cell, int]]:
        """Return the admissible neighbors of ``cell``.

        Args:
            cell: Cell to expand
            admissible: Predicate on (from_elevation, to_elevation)

        Returns:
            List of (neighbor, cost) pairs in +x, +y, -x, -y order
        """
        height_map = self.height_map
        x, y = cell
        current = height_map.elevation(cell)

        result: List[Tuple[Cell, int]] = []
        for dx, dy in DIRECTIONS:
            candidate = (x + dx, y + dy)
            # Bounds are checked before the predicate ever sees an elevation
            if not height_map.in_bounds(candidate):
                continue
            if admissible(current, height_map.elevation(candidate)):
                result.append((candidate, UNIT_COST))
        return result

    def predecessors(self, cell: Cell,
                     admissible: AdmissibilityPredicate) -> List[Tuple[Cell, int]]:
        """Return the cells that can step onto ``cell`` (reversed edges)."""
        height_map = self.height_map
        x, y = cell
        current = height_map.elevation(cell)

        result: List[Tuple[Cell, int]] = []
        for dx, dy in DIRECTIONS:
            candidate = (x + dx, y + dy)
            if not height_map.in_bounds(candidate):
                continue
            if admissible(height_map.elevation(candidate), current):
                result.append((candidate, UNIT_COST))
        return result
