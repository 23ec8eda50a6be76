"""CLI utility functions."""

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from heightmap_solver.core.data_models import HeightMap, Cell

# Arrow drawn on a cell for the step leaving it, keyed by (dx, dy)
PATH_ARROWS = {(1, 0): '>', (0, 1): 'v', (-1, 0): '<', (0, -1): '^'}


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Hydra is chatty at INFO
    logging.getLogger('hydra').setLevel(logging.WARNING)


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(results, f, indent=2, sort_keys=True)
        else:
            json.dump(results, f)


def render_path(height_map: HeightMap, path: Sequence[Cell]) -> str:
    """Draw ``path`` over the map.

    Each cell on the path except the last shows an arrow for the step
    leaving it, the goal shows 'E', and every other cell shows '.'.
    """
    canvas = [['.'] * height_map.width for _ in range(height_map.height)]
    for (x, y), (nx, ny) in zip(path, path[1:]):
        canvas[y][x] = PATH_ARROWS[(nx - x, ny - y)]
    if path:
        gx, gy = path[-1]
        canvas[gy][gx] = 'E'
    return '\n'.join(''.join(row) for row in canvas)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


class ProgressReporter:
    """Progress reporting for batch processing."""

    def __init__(self, total_maps: int, report_interval: int = 10):
        """Initialize progress reporter.

        Args:
            total_maps: Total number of maps
            report_interval: Report progress every N maps
        """
        self.total_maps = total_maps
        self.report_interval = max(1, report_interval)
        self.completed_maps = 0
        self.solved_maps = 0
        self.start_time = time.time()

    def update(self, success: bool = False) -> None:
        """Record one processed map.

        Args:
            success: Whether a path was found
        """
        self.completed_maps += 1
        if success:
            self.solved_maps += 1

        if (self.completed_maps % self.report_interval == 0 or
                self.completed_maps == self.total_maps):
            self._report_progress()

    def _report_progress(self) -> None:
        elapsed = time.time() - self.start_time
        print(f"Progress: {self.completed_maps}/{self.total_maps} "
              f"({self.completed_maps/self.total_maps*100:.1f}%) | "
              f"Solved: {self.solved_maps} | "
              f"Elapsed: {format_duration(elapsed)}")


def create_result_summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Create summary statistics from batch results.

    Args:
        results: List of individual map results

    Returns:
        Summary statistics dictionary
    """
    if not results:
        return {
            'total_maps': 0,
            'solved_maps': 0,
            'failed_maps': 0,
            'solve_rate': 0.0,
            'total_time': 0.0,
            'average_time': 0.0,
            'min_cost': None,
            'max_cost': None,
        }

    solved = [r for r in results if r.get('success', False)]
    times = [r.get('computation_time', 0.0) for r in results]
    costs = [r['cost'] for r in solved]

    total_time = sum(times)
    return {
        'total_maps': len(results),
        'solved_maps': len(solved),
        'failed_maps': len(results) - len(solved),
        'solve_rate': len(solved) / len(results),
        'total_time': total_time,
        'average_time': total_time / len(results),
        'min_cost': min(costs) if costs else None,
        'max_cost': max(costs) if costs else None,
    }


def print_summary(summary: Dict[str, Any]) -> None:
    """Print batch processing summary.

    Args:
        summary: Summary statistics dictionary
    """
    print("\n" + "="*60)
    print("BATCH PROCESSING SUMMARY")
    print("="*60)

    print(f"Total maps:       {summary['total_maps']}")
    print(f"Solved:           {summary['solved_maps']} ({summary['solve_rate']*100:.1f}%)")
    print(f"No path / failed: {summary['failed_maps']}")
    if summary['min_cost'] is not None:
        print(f"Cost range:       {summary['min_cost']} - {summary['max_cost']}")

    print(f"\nTiming Statistics:")
    print(f"Total time:       {format_duration(summary['total_time'])}")
    print(f"Average time:     {format_duration(summary['average_time'])}")
