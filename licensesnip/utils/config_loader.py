"""
Configuration Loader

Utilities for loading YAML configuration files with validation.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional


class ConfigLoader:
    """
    Load and validate YAML configuration files.

    JSON documents are accepted too, since JSON is a subset of YAML.
    """

    @staticmethod
    def load(config_path: str, required_keys: Optional[list] = None) -> Dict[str, Any]:
        """
        Load a YAML configuration file.

        Args:
            config_path: Path to YAML file
            required_keys: List of keys that must be present in config

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If required keys are missing or the document is not a mapping
            yaml.YAMLError: If YAML is invalid
        """
        path = Path(config_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        if config is None:
            config = {}

        if not isinstance(config, dict):
            raise ValueError(f"Configuration root must be a mapping: {config_path}")

        # Validate required keys
        if required_keys:
            missing = [key for key in required_keys if key not in config]
            if missing:
                raise ValueError(f"Missing required configuration keys: {missing}")

        return config
