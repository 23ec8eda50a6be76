"""Core data models for the heightmap solver."""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple
import numpy as np


# Type aliases for clarity
Cell = Tuple[int, int]  # (x, y) == (column, row)
Elevation = int  # 0 ('a') .. 25 ('z')

MIN_ELEVATION: Elevation = 0
MAX_ELEVATION: Elevation = 25

START_MARKER = 'S'
GOAL_MARKER = 'E'


class GridParseError(ValueError):
    """Raised when elevation rows cannot be turned into a HeightMap."""

    def __init__(self, message: str, row: Optional[int] = None, column: Optional[int] = None):
        self.row = row
        self.column = column
        if row is not None and column is not None:
            message = f"{message} (row {row}, column {column})"
        elif row is not None:
            message = f"{message} (row {row})"
        super().__init__(message)


class OutOfBoundsError(IndexError):
    """Raised when a cell outside the grid is dereferenced."""
    pass


def label_to_elevation(label: str) -> Elevation:
    """Convert a single elevation label to its numeric elevation."""
    if label == START_MARKER:
        return MIN_ELEVATION
    if label == GOAL_MARKER:
        return MAX_ELEVATION
    if len(label) == 1 and 'a' <= label <= 'z':
        return ord(label) - ord('a')
    raise ValueError(f"Invalid elevation label: {label!r}")


def elevation_to_label(elevation: Elevation) -> str:
    """Convert a numeric elevation back to its letter."""
    if not MIN_ELEVATION <= elevation <= MAX_ELEVATION:
        raise ValueError(f"Elevation out of range: {elevation}")
    return chr(ord('a') + int(elevation))


@dataclass(frozen=True)
class HeightMap:
    """Immutable rectangular grid of elevations with a start and a goal cell.

    Elevations are stored row-major in a read-only ``(height, width)`` array,
    so ``elevations[y, x]`` is the elevation of cell ``(x, y)``.
    """

    elevations: np.ndarray
    start: Cell
    goal: Cell

    def __post_init__(self) -> None:
        """Validate shape and markers, then freeze the elevation array."""
        grid = np.array(self.elevations, dtype=np.int8)
        assert grid.ndim == 2, f"Expected 2D elevation grid, got {grid.ndim}D"
        assert grid.size > 0, "Elevation grid must not be empty"
        assert grid.min() >= MIN_ELEVATION and grid.max() <= MAX_ELEVATION, \
            "Elevations must lie within the a..z scale"

        height, width = grid.shape
        for name, cell in (('start', self.start), ('goal', self.goal)):
            x, y = cell
            assert 0 <= x < width and 0 <= y < height, f"{name} cell {cell} is out of bounds"

        # Start and goal sit at the ends of the scale regardless of their markers
        grid[self.start[1], self.start[0]] = MIN_ELEVATION
        grid[self.goal[1], self.goal[0]] = MAX_ELEVATION
        grid.setflags(write=False)

        object.__setattr__(self, 'elevations', grid)
        object.__setattr__(self, 'start', (int(self.start[0]), int(self.start[1])))
        object.__setattr__(self, 'goal', (int(self.goal[0]), int(self.goal[1])))

    @classmethod
    def build(cls, rows: Sequence[str]) -> 'HeightMap':
        """Build a HeightMap from rows of elevation labels.

        Args:
            rows: One string per grid row, made of 'a'-'z', one 'S' and one 'E'

        Returns:
            Validated HeightMap

        Raises:
            GridParseError: If rows are ragged, empty, contain unknown labels,
                or the start/goal markers are missing or duplicated
        """
        if not rows:
            raise GridParseError("Height map has no rows")

        width = len(rows[0])
        if width == 0:
            raise GridParseError("Height map rows are empty", row=0)

        elevations: List[List[int]] = []
        start: Optional[Cell] = None
        goal: Optional[Cell] = None

        for y, row in enumerate(rows):
            if len(row) != width:
                raise GridParseError(
                    f"Ragged height map: expected {width} labels, got {len(row)}", row=y
                )
            values = []
            for x, label in enumerate(row):
                if label == START_MARKER:
                    if start is not None:
                        raise GridParseError("Duplicate start marker", row=y, column=x)
                    start = (x, y)
                elif label == GOAL_MARKER:
                    if goal is not None:
                        raise GridParseError("Duplicate goal marker", row=y, column=x)
                    goal = (x, y)
                try:
                    values.append(label_to_elevation(label))
                except ValueError:
                    raise GridParseError(f"Unknown elevation label {label!r}", row=y, column=x) from None
            elevations.append(values)

        if start is None:
            raise GridParseError(f"No start marker '{START_MARKER}' found")
        if goal is None:
            raise GridParseError(f"No goal marker '{GOAL_MARKER}' found")

        return cls(elevations=np.array(elevations, dtype=np.int8), start=start, goal=goal)

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width) of the grid."""
        return self.elevations.shape

    @property
    def width(self) -> int:
        return self.elevations.shape[1]

    @property
    def height(self) -> int:
        return self.elevations.shape[0]

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def elevation(self, cell: Cell) -> Elevation:
        """Return the elevation at ``cell``.

        Raises:
            OutOfBoundsError: If the cell lies outside the grid
        """
        if not self.in_bounds(cell):
            raise OutOfBoundsError(f"Cell {cell} outside {self.width}x{self.height} grid")
        x, y = cell
        return int(self.elevations[y, x])

    def label(self, cell: Cell) -> str:
        return elevation_to_label(self.elevation(cell))

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def to_text(self) -> str:
        """Render the grid back to labels, with the start and goal markers."""
        lines = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if (x, y) == self.start:
                    row.append(START_MARKER)
                elif (x, y) == self.goal:
                    row.append(GOAL_MARKER)
                else:
                    row.append(elevation_to_label(int(self.elevations[y, x])))
            lines.append(''.join(row))
        return '\n'.join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeightMap):
            return NotImplemented
        return (self.start == other.start and self.goal == other.goal
                and np.array_equal(self.elevations, other.elevations))

    def __hash__(self) -> int:
        return hash((self.start, self.goal, self.elevations.tobytes()))
