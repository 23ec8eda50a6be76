"""Configuration validation for the heightmap solver."""

import logging
from omegaconf import DictConfig

from heightmap_solver.core.data_models import MIN_ELEVATION, MAX_ELEVATION
from heightmap_solver.search.heuristics import HEURISTICS
from heightmap_solver.search.neighbors import ADMISSIBILITY_RULES

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_multi_source_config(config.get('multi_source', {}))
        validate_logging_config(config.get('logging', {}))
    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}") from e

    logger.debug("Configuration validation passed")


def _validate_rule(section: str, rule) -> None:
    if rule not in ADMISSIBILITY_RULES:
        raise ConfigValidationError(
            f"{section}.admissibility must be one of {sorted(ADMISSIBILITY_RULES)}, got {rule}"
        )


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    heuristic = search_config.get('heuristic', 'chebyshev')
    if heuristic not in HEURISTICS:
        raise ConfigValidationError(
            f"search.heuristic must be one of {sorted(HEURISTICS)}, got {heuristic}"
        )

    max_nodes = search_config.get('max_nodes_expanded', None)
    if max_nodes is not None and (
            isinstance(max_nodes, bool) or not isinstance(max_nodes, int) or max_nodes <= 0):
        raise ConfigValidationError(
            f"search.max_nodes_expanded must be positive integer or null, got {max_nodes}"
        )

    _validate_rule('search', search_config.get('admissibility', 'climb'))


def validate_multi_source_config(multi_config: DictConfig) -> None:
    """Validate multi-source configuration section.

    Args:
        multi_config: Multi-source configuration section
    """
    if not multi_config:
        return

    level = multi_config.get('start_elevation', MIN_ELEVATION)
    if isinstance(level, bool) or not isinstance(level, int) \
            or not MIN_ELEVATION <= level <= MAX_ELEVATION:
        raise ConfigValidationError(
            f"multi_source.start_elevation must be integer between "
            f"{MIN_ELEVATION} and {MAX_ELEVATION}, got {level}"
        )

    workers = multi_config.get('max_workers', 1)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ConfigValidationError(
            f"multi_source.max_workers must be positive integer, got {workers}"
        )

    _validate_rule('multi_source', multi_config.get('admissibility', 'first-step'))


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section.

    Args:
        logging_config: Logging configuration section
    """
    if not logging_config:
        return

    level = str(logging_config.get('level', 'WARNING')).upper()
    if level not in LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {list(LOG_LEVELS)}, got {level}"
        )
