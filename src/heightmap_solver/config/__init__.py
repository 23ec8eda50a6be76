"""Configuration management for the heightmap solver.

This module provides Hydra-based configuration management with per-command
parameter groups and runtime override capabilities.
"""

from .config_manager import ConfigManager, load_config, get_config, get_parameter
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'get_config',
    'get_parameter',
    'validate_config',
    'ConfigValidationError'
]
