"""Main CLI entry point for the heightmap solver."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging
from heightmap_solver.search.heuristics import HEURISTICS
from heightmap_solver.search.neighbors import ADMISSIBILITY_RULES


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='heightmap-solver',
        description='Heightmap solver - A* shortest climbs over elevation maps',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  heightmap-solver solve map.txt                 # Shortest climb from S to E
  heightmap-solver solve map.txt --show-path     # Draw the path on the map
  heightmap-solver scan map.txt --threads 4      # Best start among all 'a' cells
  heightmap-solver batch maps/ --mode scan       # Process every map in a folder
  heightmap-solver config show                   # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        action='append',
        help='Configuration override, repeatable (e.g., search.heuristic=manhattan)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Find the shortest path from S to E',
        description='Find the shortest path from the start marker to the goal marker'
    )
    solve_parser.add_argument('map_file', type=str, help='Path to height map text file')
    _add_search_options(solve_parser)
    solve_parser.add_argument(
        '--show-path',
        action='store_true',
        help='Print the map with the path drawn on it'
    )

    # Scan command
    scan_parser = subparsers.add_parser(
        'scan',
        help='Find the shortest path to E from any eligible start',
        description='Search from every cell at the start elevation and keep the cheapest path'
    )
    scan_parser.add_argument('map_file', type=str, help='Path to height map text file')
    _add_search_options(scan_parser)
    scan_parser.add_argument(
        '--start-elevation',
        type=int,
        help='Elevation of eligible start cells, 0 for a (default from config)'
    )
    scan_parser.add_argument(
        '--threads', '-j',
        type=int,
        help='Number of threads for independent searches (default from config)'
    )
    scan_parser.add_argument(
        '--reverse',
        action='store_true',
        help='Use one breadth-first search from the goal instead of one search per start'
    )

    # Batch command
    batch_parser = subparsers.add_parser(
        'batch',
        help='Process multiple height maps',
        description='Process every *.txt height map in a directory'
    )
    batch_parser.add_argument('input_path', type=str, help='Directory containing map files')
    batch_parser.add_argument(
        '--mode',
        choices=['solve', 'scan'],
        default='solve',
        help='Search to run on each map (default: solve)'
    )
    batch_parser.add_argument(
        '--max-maps',
        type=int,
        help='Maximum number of maps to process'
    )
    batch_parser.add_argument(
        '--report-interval',
        type=int,
        default=10,
        help='Progress report interval (default: 10)'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Manage solver configuration'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )
    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('validate', help='Validate configuration')

    return parser


def _add_search_options(subparser: argparse.ArgumentParser) -> None:
    """Options shared by the single- and multi-source commands."""
    subparser.add_argument(
        '--rule',
        choices=sorted(ADMISSIBILITY_RULES),
        help='Admissibility rule for each step (default from config)'
    )
    subparser.add_argument(
        '--heuristic',
        choices=sorted(HEURISTICS),
        help='A* heuristic (default from config)'
    )
    subparser.add_argument(
        '--max-nodes',
        type=int,
        help='Expansion budget per search (default: unlimited)'
    )


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error or no path)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Setup logging based on verbosity
    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'scan':
            return commands.scan_command(parsed_args)
        if parsed_args.command == 'batch':
            return commands.batch_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
