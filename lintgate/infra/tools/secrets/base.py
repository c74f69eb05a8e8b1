"""Secret scanning tools: Gitleaks and detect-secrets.

Both scan the whole working tree rather than a matched file list.

Classes
-------
GitleaksTool : Gitleaks ``detect`` over the mounted tree
DetectSecretsTool : detect-secrets in baseline ``scan`` or ``audit`` mode

See Also
--------
lintgate.application.baseline : Decides which detect-secrets mode to run
"""
from __future__ import annotations

from typing import Any, List, Sequence

from ..base import CheckTool, PipInstalledTool


class GitleaksTool(CheckTool):
    """
    Wrapper for Gitleaks CLI execution.

    Gitleaks exits 1 when leaks are found, which the dispatcher records as a
    finding.
    """

    @property
    def name(self) -> str:
        return "gitleaks"

    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        return ["detect", "--source", ".", *self.args]


class DetectSecretsTool(PipInstalledTool):
    """
    detect-secrets against the allow-list baseline.

    ``scan`` prints a fresh baseline on stdout; ``audit`` reports on an
    existing baseline and fails while any finding is unreviewed.

    Examples
    --------
    >>> DetectSecretsTool(mode="audit").tool_args([])
    ['audit', '.secrets.baseline', '--report', '--json', '--fail-on-unaudited']
    """

    package = "detect-secrets"
    MODES = ("scan", "audit")

    def __init__(self, *, mode: str = "audit", baseline: str = ".secrets.baseline", **kw: Any) -> None:
        if mode not in self.MODES:
            raise ValueError(f"Unknown detect-secrets mode '{mode}'")
        super().__init__(**kw)
        self.mode = mode
        self.baseline = baseline

    @property
    def name(self) -> str:
        return "detect-secrets"

    def tool_args(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        if self.mode == "scan":
            return ["scan", *self.args]
        return ["audit", self.baseline, "--report", "--json", "--fail-on-unaudited", *self.args]


__all__ = ["GitleaksTool", "DetectSecretsTool"]
