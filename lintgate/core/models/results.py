"""Result models for file discovery and check execution.

Classes
-------
FileSet : Files discovered for one profile
ToolRunResult : Raw outcome of one subprocess invocation
CheckResult : Classified outcome of one check
RunReport : Ordered results plus the overall outcome

Examples
--------
>>> report = RunReport(results=())
>>> report.outcome
<Outcome.passed: 'passed'>
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .profile import Check, Phase, Severity

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ENVIRONMENT = 2
EXIT_CONFIGURATION = 3


class Outcome(str, Enum):
    passed = "passed"
    failed = "failed"
    skipped = "skipped"


class Classification(str, Enum):
    """Orchestrator-added tag explaining an outcome."""

    finding = "finding"
    environment = "environment"
    aborted = "aborted"
    no_files = "no-files"
    baseline_empty = "baseline-empty"


class FileSet(BaseModel):
    """Ordered, root-relative files matched for one profile.

    An empty FileSet is a normal state meaning "no files of this type".
    A ``whole_tree`` set stands for the entire root and is never empty; the
    global secret scan uses it.
    """

    model_config = ConfigDict(frozen=True)

    profile: str
    root: Path
    files: Tuple[PurePosixPath, ...] = ()
    whole_tree: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.files and not self.whole_tree

    def directories(self) -> List[PurePosixPath]:
        """Distinct parent directories of the files, sorted."""
        return sorted({f.parent for f in self.files})

    def __len__(self) -> int:
        return len(self.files)


class ToolRunResult(BaseModel):
    tool: str
    cmd: List[str]
    cwd: str
    returncode: int
    duration_s: float
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """stdout and stderr joined, for diagnostics."""
        parts = [p.rstrip() for p in (self.stdout, self.stderr) if p and p.strip()]
        return "\n".join(parts)


class CheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    profile: str
    check: str
    phase: Phase
    severity: Severity
    outcome: Outcome
    classification: Optional[Classification] = None
    diagnostic: str = ""

    @classmethod
    def for_check(
        cls,
        profile: str,
        check: Check,
        outcome: Outcome,
        classification: Optional[Classification] = None,
        diagnostic: str = "",
    ) -> "CheckResult":
        return cls(
            profile=profile,
            check=check.name,
            phase=check.phase,
            severity=check.severity,
            outcome=outcome,
            classification=classification,
            diagnostic=diagnostic,
        )

    @property
    def key(self) -> Tuple[str, str]:
        return (self.profile, self.check)

    @property
    def is_blocking(self) -> bool:
        """True if this result fails the run.

        Skipped results never block. Advisory failures only block when the
        environment itself was unavailable.
        """
        if self.outcome != Outcome.failed:
            return False
        return self.severity == Severity.fatal or self.classification == Classification.environment


class RunReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: Tuple[CheckResult, ...] = ()

    @property
    def outcome(self) -> Outcome:
        if any(r.is_blocking for r in self.results):
            return Outcome.failed
        return Outcome.passed

    @property
    def exit_code(self) -> int:
        blocking = [r for r in self.results if r.is_blocking]
        if any(r.classification == Classification.environment for r in blocking):
            return EXIT_ENVIRONMENT
        if blocking:
            return EXIT_FAILED
        return EXIT_OK

    def by_profile(self, profile: str) -> List[CheckResult]:
        return [r for r in self.results if r.profile == profile]


__all__ = [
    "EXIT_OK",
    "EXIT_FAILED",
    "EXIT_ENVIRONMENT",
    "EXIT_CONFIGURATION",
    "Outcome",
    "Classification",
    "FileSet",
    "ToolRunResult",
    "CheckResult",
    "RunReport",
]
