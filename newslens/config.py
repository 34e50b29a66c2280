"""
Configuration management for newslens.
"""
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = 'NEWSLENS_'

# Default configuration
DEFAULT_CONFIG = {
    "clustering": {
        "threshold": 0.4
    },
    "keywords": {
        "cache_size": 2000
    },
    "dedupe": {
        "title_threshold": 0.75
    }
}


class Config:
    """
    Configuration manager for newslens.
    """
    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the Config.

        Args:
            config_path: Path to a YAML or JSON configuration file
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file or use defaults.

        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path:
            try:
                user_config = self._read_file(Path(self.config_path))
                if user_config:
                    self._update_dict(config, user_config)
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")
                logger.error("Using default configuration")

        # Override with environment variables
        self._override_from_env(config)

        return config

    @staticmethod
    def _read_file(path: Path) -> Optional[Dict]:
        if not path.exists():
            logger.warning(f"Config file {path} not found")
            return None

        with open(path, 'r') as f:
            if path.suffix.lower() in ['.yaml', '.yml']:
                return yaml.safe_load(f)
            if path.suffix.lower() == '.json':
                return json.load(f)
        raise ValueError(f"Unsupported config file format: {path.suffix}")

    def _update_dict(self, target: Dict, source: Dict) -> None:
        """
        Recursively update a dictionary.

        Args:
            target: Target dictionary to update
            source: Source dictionary with new values
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _override_from_env(self, config: Dict, prefix: str = ENV_PREFIX) -> None:
        """
        Override configuration with environment variables.

        ``NEWSLENS_CLUSTERING_THRESHOLD=0.5`` sets ``clustering.threshold``.
        The first underscore after the prefix separates the section from the
        key, so keys may contain underscores themselves.

        Args:
            config: Configuration dictionary to update
            prefix: Prefix for environment variables
        """
        for key, value in os.environ.items():
            if not key.startswith(prefix) or key == prefix + 'CONFIG_PATH':
                continue

            parts = key[len(prefix):].lower().split('_', 1)
            if len(parts) != 2 or not all(parts):
                continue
            section, name = parts

            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                continue

            try:
                # Try to parse as JSON
                current[name] = json.loads(value)
            except json.JSONDecodeError:
                # If not valid JSON, use as string
                current[name] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., 'clustering.threshold')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        current = self.config
        for part in key.split('.'):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current


_config: Optional[Config] = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value from the process-wide configuration.

    Args:
        key: Dot-separated key path (e.g., 'clustering.threshold')
        default: Default value if key not found

    Returns:
        Configuration value
    """
    global _config
    if _config is None:
        _config = Config(os.getenv('NEWSLENS_CONFIG_PATH'))
    return _config.get(key, default)


def reset_config() -> None:
    """Forget the loaded configuration so the next lookup reloads it."""
    global _config
    _config = None
