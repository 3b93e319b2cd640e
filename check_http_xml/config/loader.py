"""Configuration loader merging command line options with an optional YAML file."""

import yaml
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..utils.errors import ConfigError
from .models import CheckConfig


class ConfigLoader:
    """Load and validate check configuration."""

    @staticmethod
    def load(options: Dict[str, Any], config_path: Optional[str] = None) -> CheckConfig:
        """
        Build a validated configuration.

        Values from ``options`` (command line) override values from the
        YAML file; options that are None are ignored.

        Args:
            options: Option name to value, as parsed from the command line
            config_path: Optional path to a YAML configuration file

        Returns:
            CheckConfig: Validated configuration object

        Raises:
            ConfigError: If the file is missing or unreadable, or validation fails
        """
        raw_config: Dict[str, Any] = {}
        if config_path:
            raw_config = ConfigLoader.load_file(config_path)

        raw_config.update({k: v for k, v in options.items() if v is not None})

        try:
            return CheckConfig(**raw_config)
        except ValidationError as e:
            raise ConfigError(ConfigLoader._describe(e)) from e

    @staticmethod
    def load_file(config_path: str) -> Dict[str, Any]:
        """
        Read a YAML file with environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Dict of option values

        Raises:
            ConfigError: If the file is missing or is not a YAML mapping
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r') as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if raw_config is None:
            return {}
        if not isinstance(raw_config, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {config_path}")

        return ConfigLoader._substitute_env_vars(raw_config)

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """
        Recursively substitute ${ENV_VAR} placeholders with environment values.

        Args:
            obj: Object to process (str, dict, list, or primitive)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, str):
            pattern = r'\$\{(\w+)\}'
            return re.sub(pattern, lambda m: os.getenv(m.group(1), ''), obj)

        elif isinstance(obj, dict):
            return {k: ConfigLoader._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [ConfigLoader._substitute_env_vars(item) for item in obj]

        return obj

    @staticmethod
    def _describe(error: ValidationError) -> str:
        """Flatten pydantic errors into one line."""
        parts = []
        for err in error.errors():
            location = ".".join(str(part) for part in err['loc'])
            message = err['msg'].removeprefix('Value error, ')
            parts.append(f"{location}: {message}" if location else message)
        return "; ".join(parts)
