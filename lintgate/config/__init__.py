# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""
Configuration package for lintgate.

This package provides configuration management functionality including
schema definition, validation, and loading from multiple sources.
"""

from .config_schema import (
    Config,
    LanguageConfig,
    LoggingConfig,
    ProjectConfig,
    SandboxConfig,
    ToolsConfig,
)
from .config_loader import ConfigLoader, find_config_file, load_config

__all__ = [
    'Config',
    'LanguageConfig',
    'LoggingConfig',
    'ProjectConfig',
    'SandboxConfig',
    'ToolsConfig',
    'ConfigLoader',
    'find_config_file',
    'load_config',
]
