# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Configuration loader for lintgate.

This module handles loading configuration from multiple sources with
well-defined precedence rules.

Configuration Sources
---------------------
Priority order (highest to lowest):

1. Command-line arguments (highest priority)
2. Environment variables (prefixed with LINTGATE_)
3. Configuration file (YAML or TOML)
4. Default values (lowest priority)

When no file is given explicitly, the scan root is searched for
``.lintgate.yaml``, ``.lintgate.yml`` and a ``[tool.lintgate]`` table in
``pyproject.toml``, in that order.

Environment Variables
---------------------
All environment variables must be prefixed with `LINTGATE_`. Sections and
options are separated by a double underscore, and list options take
comma-separated values: `LINTGATE_PYTHON__EXCLUDE=.git,.venv,build`

Examples
--------
    >>> loader = ConfigLoader()
    >>> config = loader.load_config('.lintgate.yaml')
    >>> config.sandbox.engine
    'docker'
"""

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config_schema import Config
from lintgate.core.exceptions import ConfigurationError

CONFIG_FILENAMES = (".lintgate.yaml", ".lintgate.yml")


class ConfigLoader:
    """Configuration loader that supports multiple sources.

    Attributes
    ----------
    ENV_PREFIX : str
        Prefix for environment variables ('LINTGATE_').
    config : Config
        Internal configuration object.
    """

    ENV_PREFIX = "LINTGATE_"

    def __init__(self):
        """Initialize configuration loader with default config."""
        self.config = Config()

    def load_from_file(self, file_path: str) -> Config:
        """
        Load configuration from a file.

        Supports YAML and TOML formats based on file extension.

        Args:
            file_path: Path to configuration file

        Returns:
            Config instance

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise ConfigurationError(
                "file_path",
                f"Configuration file not found: {file_path}"
            )

        try:
            if path.suffix in ['.yaml', '.yml']:
                with open(path, 'r', encoding='utf-8') as f:
                    config_dict = yaml.safe_load(f) or {}
            elif path.suffix == '.toml':
                with open(path, 'rb') as f:
                    config_dict = tomllib.load(f)
                # pyproject.toml keeps its settings under [tool.lintgate]
                if path.name == 'pyproject.toml':
                    config_dict = config_dict.get('tool', {}).get('lintgate', {})
            else:
                raise ConfigurationError(
                    "file_format",
                    f"Unsupported configuration file format: {path.suffix}"
                )
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "yaml_parse",
                f"Failed to parse YAML configuration: {e}"
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                "toml_parse",
                f"Failed to parse TOML configuration: {e}"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                "file_load",
                f"Failed to load configuration file: {e}"
            ) from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                "file_format",
                f"Configuration file must contain a mapping: {file_path}"
            )

        # Handle nested 'lintgate' key if present
        if 'lintgate' in config_dict:
            config_dict = config_dict['lintgate']

        try:
            self.config = Config.from_dict(config_dict)
        except TypeError as e:
            raise ConfigurationError(
                "file_content",
                f"Unknown option in {file_path}: {e}"
            ) from e
        return self.config

    def load_from_env(self) -> Config:
        """
        Load configuration from environment variables.

        Example:
            LINTGATE_PROJECT__ROOT=/path/to/project
            LINTGATE_SANDBOX__ENGINE=podman
            LINTGATE_TERRAFORM__EXCLUDE=.git,.terraform,modules

        Returns:
            Config instance with values from environment
        """
        env_config: Dict[str, Dict[str, Any]] = {}

        for key, value in os.environ.items():
            if key.startswith(self.ENV_PREFIX):
                config_key = key[len(self.ENV_PREFIX):].lower()
                parts = config_key.split('__')

                if len(parts) == 2:
                    section, option = parts
                    env_config.setdefault(section, {})[option] = self._parse_value(value)

        if env_config:
            self._merge_config(env_config)

        return self.config

    def load_from_args(self, args: Dict[str, Any]) -> Config:
        """
        Load configuration from command-line arguments.

        Args:
            args: Dictionary of argument names and values

        Returns:
            Config instance with values from arguments
        """
        if not args:
            return self.config

        arg_mapping = {
            'root': ('project', 'root'),
            'script': ('project', 'script'),
            'baseline': ('project', 'baseline'),
            'engine': ('sandbox', 'engine'),
            'log_level': ('logging', 'level'),
            'log_file': ('logging', 'file'),
        }

        for arg_name, value in args.items():
            if value is not None and arg_name in arg_mapping:
                section, option = arg_mapping[arg_name]
                self._set_config_value(section, option, value)

        return self.config

    def load_config(
        self,
        config_file: Optional[str] = None,
        env: bool = True,
        args: Optional[Dict[str, Any]] = None
    ) -> Config:
        """
        Load configuration from multiple sources.

        Args:
            config_file: Path to configuration file (optional). When omitted,
                the root given in ``args`` (or the cwd) is searched.
            env: Whether to load from environment variables
            args: Command-line arguments dictionary (optional)

        Returns:
            Validated Config instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        self.config = Config()

        if config_file is None:
            root = (args or {}).get('root') or os.environ.get(f"{self.ENV_PREFIX}PROJECT__ROOT") or "."
            found = find_config_file(Path(root))
            config_file = str(found) if found else None

        if config_file:
            self.load_from_file(config_file)

        if env:
            self.load_from_env()

        if args:
            self.load_from_args(args)

        self.config.validate()

        return self.config

    def _merge_config(self, partial_config: Dict[str, Any]):
        """
        Merge partial configuration into existing config.

        List-valued options accept a comma-separated string.

        Args:
            partial_config: Dictionary with partial configuration
        """
        for section, values in partial_config.items():
            for key, value in values.items():
                self._set_config_value(section, key, value)

    def _set_config_value(self, section: str, option: str, value: Any):
        """
        Set a single configuration value.

        Args:
            section: Configuration section name
            option: Option name within section
            value: Value to set

        Raises:
            ConfigurationError: If a mapping option is given a plain value
        """
        if hasattr(self.config, section):
            section_obj = getattr(self.config, section)
            if hasattr(section_obj, option):
                current = getattr(section_obj, option)
                if isinstance(current, dict) and not isinstance(value, dict):
                    raise ConfigurationError(
                        f"{section}.{option}",
                        f"Expected a mapping, got {value!r}; set it in a configuration file"
                    )
                if isinstance(current, list) and not isinstance(value, list):
                    value = [v.strip() for v in str(value).split(',') if v.strip()]
                elif isinstance(current, str) and not isinstance(value, str):
                    value = str(value)
                setattr(section_obj, option, value)

    @staticmethod
    def _parse_value(value: str) -> Any:
        """
        Parse string value to appropriate type.

        Args:
            value: String value from environment variable

        Returns:
            Parsed value (bool, int, or str)
        """
        if value.lower() in ('true', 'yes', 'on'):
            return True
        if value.lower() in ('false', 'no', 'off'):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value


def find_config_file(root: Path) -> Optional[Path]:
    """Return the first configuration file present in ``root``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        try:
            with open(pyproject, 'rb') as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return None
        if 'lintgate' in data.get('tool', {}):
            return pyproject
    return None


def load_config(
    config_file: Optional[str] = None,
    env: bool = True,
    args: Optional[Dict[str, Any]] = None
) -> Config:
    """
    Convenience function to load configuration.

    Args:
        config_file: Path to configuration file (optional)
        env: Whether to load from environment variables
        args: Command-line arguments dictionary (optional)

    Returns:
        Validated Config instance
    """
    loader = ConfigLoader()
    return loader.load_config(config_file=config_file, env=env, args=args)
