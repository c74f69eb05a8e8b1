"""Application layer for lintgate.

This package contains the check orchestration: file discovery, dispatch,
aggregation, baseline management and repository housekeeping.
"""
from __future__ import annotations

from .aggregator import ResultAggregator
from .baseline import BaselineManager, BaselineState, SecretBaseline
from .dispatcher import Dispatcher, available_tools, instantiate_tool
from .file import discover_files, resolve_file_set, script_override
from .orchestrator import ALL_PHASES, CHECK_PHASES, CI_PHASES, CheckOrchestrator

__all__ = [
    "ResultAggregator",
    "BaselineManager",
    "BaselineState",
    "SecretBaseline",
    "Dispatcher",
    "available_tools",
    "instantiate_tool",
    "discover_files",
    "resolve_file_set",
    "script_override",
    "ALL_PHASES",
    "CHECK_PHASES",
    "CI_PHASES",
    "CheckOrchestrator",
]
