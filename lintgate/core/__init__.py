"""Core domain logic for lintgate.

This package contains the data models, the declared language profiles,
exceptions and logging configuration.
"""
from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    EnvironmentUnavailableError,
    LintGateError,
    ToolExecutionError,
)

__all__ = [
    "ConfigurationError",
    "EnvironmentUnavailableError",
    "LintGateError",
    "ToolExecutionError",
]
