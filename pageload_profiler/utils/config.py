# pageload_profiler/utils/config.py - Configuration management
"""
Configuration management for the profiler.
Loads and validates configuration from YAML files.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from pageload_profiler.analyzer.quiet_periods import (
    MIN_QUIET_DURATION,
    MAX_CONCURRENT_NETWORK_REQUESTS_WHILE_QUIET,
)


class Config:
    """
    Configuration manager for the profiler.

    Loads configuration from YAML files and provides access to settings.
    """

    DEFAULT_CONFIG = {
        'interactive': {
            'min_quiet_duration_ms': MIN_QUIET_DURATION,
            'max_concurrent_network_requests': MAX_CONCURRENT_NETWORK_REQUESTS_WHILE_QUIET,
        },
        'output': {
            'format': 'stdout',
            'directory': '.',
            'use_colors': True,
        },
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML configuration file
        """
        self.logger = logging.getLogger(__name__)
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_from_file(config_file)

    def load_from_file(self, config_file: str):
        """
        Load configuration from YAML file.

        Args:
            config_file: Path to YAML file
        """
        config_path = Path(config_file)

        if not config_path.exists():
            self.logger.warning(f"Config file not found: {config_file}, using defaults")
            return

        try:
            with open(config_path, 'r') as f:
                loaded_config = yaml.safe_load(f) or {}

            self._merge_config(self.config, loaded_config)
            self.validate()
            self.logger.info(f"Loaded configuration from {config_file}")

        except (yaml.YAMLError, ValueError) as e:
            self.logger.error(f"Failed to load config: {e}")
            raise

    def _merge_config(self, base: Dict, override: Dict):
        """
        Recursively merge configuration dictionaries.

        Args:
            base: Base configuration dictionary
            override: Override configuration dictionary
        """
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def validate(self):
        """
        Check that the quiet period thresholds are usable.

        Raises:
            ValueError: If a threshold is negative or not a number
        """
        min_quiet = self.get('interactive.min_quiet_duration_ms')
        max_concurrent = self.get('interactive.max_concurrent_network_requests')

        if not isinstance(min_quiet, (int, float)) or min_quiet < 0:
            raise ValueError(f"interactive.min_quiet_duration_ms must be >= 0, got {min_quiet!r}")
        if not isinstance(max_concurrent, int) or max_concurrent < 0:
            raise ValueError(
                f"interactive.max_concurrent_network_requests must be a non-negative integer, "
                f"got {max_concurrent!r}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'interactive.min_quiet_duration_ms')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'output.format')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def to_dict(self) -> Dict:
        """
        Get full configuration as dictionary.

        Returns:
            Configuration dictionary
        """
        return copy.deepcopy(self.config)

    def save_to_file(self, config_file: str):
        """
        Save current configuration to YAML file.

        Args:
            config_file: Path to output YAML file
        """
        config_path = Path(config_file)

        try:
            with open(config_path, 'w') as f:
                yaml.dump(self.config, f, default_flow_style=False)

            self.logger.info(f"Saved configuration to {config_file}")

        except OSError as e:
            self.logger.error(f"Failed to save config: {e}")
            raise
