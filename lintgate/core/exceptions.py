# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Custom exception hierarchy for lintgate.

This module defines the exceptions raised by the orchestrator. Tool findings
are never exceptions: a linter reporting a violation is a normal
``CheckResult`` with outcome ``failed``. Exceptions are reserved for causes
that are structurally different from a finding.

Exception Hierarchy
-------------------
LintGateError (base)
├── ConfigurationError
├── EnvironmentUnavailableError
└── ToolExecutionError

Examples
--------
>>> try:
...     raise EnvironmentUnavailableError('docker', 'daemon not reachable')
... except LintGateError as e:
...     print(e.component)
docker
"""


class LintGateError(Exception):
    """Base exception for all lintgate errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Dictionary containing additional error context. Default is None.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error context information.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(LintGateError):
    """Raised for invalid configuration or malformed overrides.

    A configuration error aborts the run before any check executes; the CLI
    maps it to its own exit code.

    Parameters
    ----------
    config_key : str
        Configuration key that caused the error.
    message : str
        Error message describing the configuration issue.
    details : dict, optional
        Additional context. Default is None.

    Examples
    --------
    >>> error = ConfigurationError('project.script', 'File does not exist')
    >>> error.config_key
    'project.script'
    """

    def __init__(self, config_key: str, message: str, details: dict = None):
        details = details or {}
        details['config_key'] = config_key
        super().__init__(f"Configuration error for '{config_key}': {message}", details)
        self.config_key = config_key


class EnvironmentUnavailableError(LintGateError):
    """Raised when the execution environment for a check cannot be reached.

    This covers a missing container engine, an unreachable daemon, or a
    local executable that is not installed. It is reported distinctly from a
    tool finding.

    Parameters
    ----------
    component : str
        The engine or executable that is unavailable (e.g. 'docker', 'bash').
    message : str
        Error message describing why it is unavailable.
    details : dict, optional
        Additional context. Default is None.
    """

    def __init__(self, component: str, message: str, details: dict = None):
        details = details or {}
        details['component'] = component
        super().__init__(f"Environment unavailable ({component}): {message}", details)
        self.component = component


class ToolExecutionError(LintGateError):
    """Raised when a check references a tool that cannot be built.

    Parameters
    ----------
    tool_name : str
        Name of the tool that failed.
    message : str
        Error message describing the failure.
    details : dict, optional
        Additional error context. Default is None.

    Examples
    --------
    >>> error = ToolExecutionError('eslint', 'Unknown tool')
    >>> error.details['tool']
    'eslint'
    """

    def __init__(self, tool_name: str, message: str, details: dict = None):
        details = details or {}
        details['tool'] = tool_name
        super().__init__(f"Tool '{tool_name}' failed: {message}", details)
        self.tool_name = tool_name
