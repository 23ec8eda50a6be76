"""Configuration manager using Hydra for hierarchical configuration."""

import os
import logging
from typing import Any, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf, open_dict
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from .validators import validate_config

logger = logging.getLogger(__name__)

# Environment variable pointing at an alternative configuration directory
CONFIG_DIR_ENV = "HEIGHTMAP_SOLVER_CONFIG_DIR"

# Global configuration instance
_global_config: Optional[DictConfig] = None


def default_config_dir() -> Path:
    """Configuration directory used when none is given explicitly."""
    if os.environ.get(CONFIG_DIR_ENV):
        return Path(os.environ[CONFIG_DIR_ENV])
    # conf/ next to src/ at the project root
    return Path(__file__).parent.parent.parent.parent / "conf"


class ConfigManager:
    """Manages configuration loading and validation using Hydra."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory. If None, uses default.
        """
        if config_dir is None:
            config_dir = default_config_dir()

        self.config_dir = Path(config_dir).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        logger.debug(f"Configuration manager initialized with config_dir: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[list] = None,
                    validate: bool = True) -> DictConfig:
        """Load configuration with optional overrides.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: List of configuration overrides (e.g. "search.heuristic=manhattan")
            validate: Whether to validate the configuration

        Returns:
            Loaded and validated configuration
        """
        # Clear any existing Hydra instance
        GlobalHydra.instance().clear()

        try:
            with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
                cfg = compose(config_name=config_name, overrides=overrides or [])
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        if validate:
            validate_config(cfg)

        self.config = cfg

        global _global_config
        _global_config = cfg

        logger.info(f"Configuration loaded successfully: {config_name}")
        if overrides:
            logger.info(f"Applied overrides: {overrides}")

        return cfg

    def get_config(self) -> Optional[DictConfig]:
        """Get the currently loaded configuration."""
        return self.config

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Get a specific parameter from configuration.

        Args:
            key: Parameter key (supports dot notation, e.g., 'search.heuristic')
            default: Default value if key not found

        Returns:
            Parameter value or default
        """
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")

        return OmegaConf.select(self.config, key, default=default)

    def set_parameter(self, key: str, value: Any) -> None:
        """Set a specific parameter in the loaded configuration.

        Args:
            key: Parameter key (supports dot notation)
            value: Parameter value
        """
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")

        with open_dict(self.config):
            OmegaConf.update(self.config, key, value)

        logger.debug(f"Parameter set: {key} = {value}")


# Global configuration functions
def load_config(config_name: str = "config",
                overrides: Optional[list] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load configuration using a fresh config manager.

    Args:
        config_name: Name of the main config file
        overrides: List of configuration overrides
        config_dir: Path to configuration directory
        validate: Whether to validate the configuration

    Returns:
        Loaded configuration
    """
    manager = ConfigManager(config_dir)
    return manager.load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Get the global configuration, or None if nothing was loaded."""
    return _global_config


def get_parameter(key: str, default: Any = None) -> Any:
    """Get a parameter from global configuration.

    Args:
        key: Parameter key (supports dot notation)
        default: Default value if key not found or nothing is loaded

    Returns:
        Parameter value or default
    """
    config = get_config()
    if config is None:
        logger.warning("No global configuration loaded")
        return default

    return OmegaConf.select(config, key, default=default)
