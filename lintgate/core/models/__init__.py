"""Core data models for profiles, discovered files and check results.

Modules
-------
profile : Check and LanguageProfile definitions
results : FileSet, ToolRunResult, CheckResult and RunReport
"""
from __future__ import annotations

from .profile import Check, LanguageProfile, Phase, Severity
from .results import (
    EXIT_CONFIGURATION,
    EXIT_ENVIRONMENT,
    EXIT_FAILED,
    EXIT_OK,
    CheckResult,
    Classification,
    FileSet,
    Outcome,
    RunReport,
    ToolRunResult,
)

__all__ = [
    "Check",
    "LanguageProfile",
    "Phase",
    "Severity",
    "EXIT_OK",
    "EXIT_FAILED",
    "EXIT_ENVIRONMENT",
    "EXIT_CONFIGURATION",
    "CheckResult",
    "Classification",
    "FileSet",
    "Outcome",
    "RunReport",
    "ToolRunResult",
]
