"""CLI command implementations."""

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import DictConfig, OmegaConf

from heightmap_solver.config import (
    load_config, validate_config, ConfigValidationError
)
from heightmap_solver.core.data_models import HeightMap, GridParseError
from heightmap_solver.integration.io import load_height_map, find_map_files
from heightmap_solver.search.astar import AStarSearcher, SearchConfig
from heightmap_solver.search.bfs import reverse_minimum
from heightmap_solver.search.multi_source import MultiSourceRunner, elevation_equals
from heightmap_solver.search.neighbors import get_admissibility_rule

from .utils import (
    save_results, render_path, format_duration, ProgressReporter,
    create_result_summary, print_summary
)

logger = logging.getLogger(__name__)

SOLVER_VERSION = '0.1.0'

# Used when no conf/ directory can be found
DEFAULT_CONFIG = {
    'search': {
        'heuristic': 'chebyshev',
        'max_nodes_expanded': None,
        'admissibility': 'climb',
    },
    'multi_source': {
        'start_elevation': 0,
        'admissibility': 'first-step',
        'max_workers': 1,
    },
    'logging': {
        'level': 'WARNING',
    },
}


def load_settings(overrides: Optional[List[str]] = None) -> DictConfig:
    """Load configuration from conf/, falling back to built-in defaults.

    Args:
        overrides: Dotted "key=value" overrides

    Returns:
        Validated configuration
    """
    try:
        return load_config(overrides=overrides or [])
    except FileNotFoundError as e:
        logger.warning(f"{e}; using built-in defaults")

    config = OmegaConf.merge(
        OmegaConf.create(DEFAULT_CONFIG),
        OmegaConf.from_dotlist(overrides or [])
    )
    validate_config(config)
    return config


def collect_overrides(args) -> List[str]:
    """Translate command line flags into configuration overrides."""
    overrides: List[str] = []
    command = getattr(args, 'command', None)
    section = 'multi_source' if command == 'scan' else 'search'

    if getattr(args, 'rule', None):
        overrides.append(f"{section}.admissibility={args.rule}")
    if getattr(args, 'heuristic', None):
        overrides.append(f"search.heuristic={args.heuristic}")
    if getattr(args, 'max_nodes', None) is not None:
        overrides.append(f"search.max_nodes_expanded={args.max_nodes}")
    if getattr(args, 'start_elevation', None) is not None:
        overrides.append(f"multi_source.start_elevation={args.start_elevation}")
    if getattr(args, 'threads', None) is not None:
        overrides.append(f"multi_source.max_workers={args.threads}")

    # Global overrides come last so they win
    if getattr(args, 'config', None):
        overrides.extend(args.config)

    return overrides


def build_searcher(config: DictConfig) -> AStarSearcher:
    """Create an A* searcher from the search section of the configuration."""
    search_cfg = config.get('search', {})
    return AStarSearcher(SearchConfig(
        heuristic=str(search_cfg.get('heuristic', 'chebyshev')),
        max_nodes_expanded=search_cfg.get('max_nodes_expanded', None),
    ))


def solve_map(height_map: HeightMap, config: DictConfig) -> Dict[str, Any]:
    """Run the single-source search configured in ``config``."""
    rule_name = str(config.search.get('admissibility', 'climb'))
    searcher = build_searcher(config)
    result = searcher.search(height_map, get_admissibility_rule(rule_name))

    payload = result.to_dict()
    payload.update({
        'mode': 'solve',
        'admissibility': rule_name,
        'heuristic': searcher.config.heuristic,
    })
    return payload


def scan_map(height_map: HeightMap, config: DictConfig, reverse: bool = False) -> Dict[str, Any]:
    """Run the multi-source search configured in ``config``."""
    multi_cfg = config.get('multi_source', {})
    rule_name = str(multi_cfg.get('admissibility', 'first-step'))
    admissible = get_admissibility_rule(rule_name)
    start_elevation = int(multi_cfg.get('start_elevation', 0))
    start_predicate = elevation_equals(start_elevation)

    if reverse:
        start_time = time.perf_counter()
        found = reverse_minimum(height_map, start_predicate, admissible)
        payload = {
            'success': found is not None,
            'goal': list(height_map.goal),
            'cost': found[0] if found else None,
            'start': list(found[1]) if found else None,
            'computation_time': time.perf_counter() - start_time,
        }
    else:
        runner = MultiSourceRunner(
            searcher=build_searcher(config),
            max_workers=int(multi_cfg.get('max_workers', 1)),
        )
        payload = runner.find_minimum(height_map, start_predicate, admissible).to_dict()

    payload.update({
        'mode': 'scan',
        'method': 'reverse-bfs' if reverse else 'per-start-astar',
        'admissibility': rule_name,
        'start_elevation': start_elevation,
    })
    return payload


def _emit(result: Dict[str, Any], args) -> None:
    """Write a result to --output or stdout."""
    if args.output:
        save_results(result, args.output)
        logger.info(f"Results saved to {args.output}")
    else:
        print(json.dumps(result, indent=2))


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when a path was found)
    """
    try:
        logger.info(f"Loading height map from {args.map_file}")
        height_map = load_height_map(args.map_file)
        config = load_settings(collect_overrides(args))

        result = solve_map(height_map, config)
        result.update({
            'map_file': str(args.map_file),
            'solver_version': SOLVER_VERSION,
        })
        _emit(result, args)

        if not args.quiet:
            print(f"\nMap: {Path(args.map_file).name} ({height_map.width}x{height_map.height})")
            if result['success']:
                print(f"Shortest path: {result['cost']} steps")
                print(f"Nodes expanded: {result['search_stats']['nodes_expanded']}")
            else:
                print(f"No path ({result['termination_reason']})")
            print(f"Computation time: {format_duration(result['computation_time'])}")

        if args.show_path and result['success']:
            path = [tuple(cell) for cell in result['path']]
            print()
            print(render_path(height_map, path))

        return 0 if result['success'] else 1

    except (FileNotFoundError, GridParseError, ConfigValidationError, ValueError) as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def scan_command(args) -> int:
    """Handle scan command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when some start reaches the goal)
    """
    try:
        logger.info(f"Loading height map from {args.map_file}")
        height_map = load_height_map(args.map_file)
        config = load_settings(collect_overrides(args))

        result = scan_map(height_map, config, reverse=args.reverse)
        result.update({
            'map_file': str(args.map_file),
            'solver_version': SOLVER_VERSION,
        })
        _emit(result, args)

        if not args.quiet:
            print(f"\nMap: {Path(args.map_file).name} ({height_map.width}x{height_map.height})")
            if result['success']:
                print(f"Shortest path from any start: {result['cost']} steps "
                      f"(start {tuple(result['start'])})")
            else:
                print("No eligible start reaches the goal")
            print(f"Computation time: {format_duration(result['computation_time'])}")

        return 0 if result['success'] else 1

    except (FileNotFoundError, GridParseError, ConfigValidationError, ValueError) as e:
        logger.error(f"Scan command failed: {e}")
        return 1


def batch_command(args) -> int:
    """Handle batch command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when every map was processed)
    """
    try:
        logger.info(f"Finding map files in {args.input_path}")
        map_files = find_map_files(args.input_path, args.max_maps)
        if not map_files:
            logger.error(f"No map files found in {args.input_path}")
            return 1

        config = load_settings(collect_overrides(args))
        reporter = ProgressReporter(len(map_files), args.report_interval) if not args.quiet else None

        results: List[Dict[str, Any]] = []
        errors = 0
        for map_file in map_files:
            try:
                height_map = load_height_map(map_file)
            except GridParseError as e:
                errors += 1
                results.append({'map_file': str(map_file), 'success': False, 'error': str(e)})
                if reporter:
                    reporter.update(False)
                continue

            if args.mode == 'scan':
                result = scan_map(height_map, config)
            else:
                result = solve_map(height_map, config)
            result['map_file'] = str(map_file)
            results.append(result)
            if reporter:
                reporter.update(result['success'])

        summary = create_result_summary(results)
        output = {
            'summary': summary,
            'results': results,
            'solver_version': SOLVER_VERSION,
        }
        if args.output:
            save_results(output, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print_summary(summary)

        return 0 if errors == 0 else 1

    except (FileNotFoundError, ConfigValidationError, ValueError) as e:
        logger.error(f"Batch command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    overrides = args.config or []

    if args.config_action == 'show':
        try:
            config = load_settings(overrides)
        except ConfigValidationError as e:
            print(f"❌ Configuration validation failed: {e}")
            return 1
        print("Current Configuration:")
        print("=" * 50)
        print(OmegaConf.to_yaml(config, resolve=True))
        return 0

    if args.config_action == 'validate':
        try:
            load_settings(overrides)
        except ConfigValidationError as e:
            print(f"❌ Configuration validation failed: {e}")
            return 1
        print("✅ Configuration is valid")
        return 0

    print("Unknown config action")
    return 1
