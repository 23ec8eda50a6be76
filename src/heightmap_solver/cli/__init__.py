"""Command-line interface for the heightmap solver.

This module provides CLI commands for single maps and batch processing.
"""

from .main import main_cli
from .commands import solve_command, scan_command, batch_command, config_command
from .utils import setup_logging, save_results, render_path

__all__ = [
    'main_cli',
    'solve_command',
    'scan_command',
    'batch_command',
    'config_command',
    'setup_logging',
    'save_results',
    'render_path'
]
