"""Secret-scan baseline management.

The baseline is a detect-secrets JSON allow-list at a fixed path relative to
the scan root. Its state is read from disk on every invocation:

States
------
absent
    No file. The scanner runs once in generate mode and its output is
    written to the baseline path.
created-empty
    The file exists but is zero bytes or records no findings. There is
    nothing to audit, so the audit step is skipped.
populated
    The file records at least one finding. The audit runs and any
    unreviewed finding fails the run.

The manager writes at most once per run (only in the ``absent`` state) and
never deletes or regenerates an existing baseline.
"""
from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

from lintgate.core.exceptions import EnvironmentUnavailableError
from lintgate.core.logging_config import get_logger
from lintgate.core.models import Check, CheckResult, Classification, FileSet, Outcome

logger = get_logger(__name__)


class BaselineState(str, Enum):
    absent = "absent"
    created_empty = "created-empty"
    populated = "populated"


class SecretBaseline:
    """The on-disk allow-list artifact.

    Parameters
    ----------
    root : Path
        Scan root.
    relative_path : str
        Baseline location relative to ``root``.
    """

    def __init__(self, root: Path, relative_path: str = ".secrets.baseline") -> None:
        self.root = Path(root)
        self.relative_path = relative_path

    @property
    def path(self) -> Path:
        return self.root / self.relative_path

    def finding_count(self) -> int:
        """Number of findings recorded in the baseline.

        A file that cannot be read as UTF-8 text, or is not a detect-secrets
        JSON document, counts as one finding, so that the audit step runs
        and reports the problem.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s (%s); leaving it for the audit to report", self.path, e)
            return 1
        if not text.strip():
            return 0
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("%s is not valid JSON; leaving it for the audit to report", self.path)
            return 1
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, dict):
            return 1
        return sum(len(items) for items in results.values() if isinstance(items, list))

    def state(self) -> BaselineState:
        if not self.path.exists():
            return BaselineState.absent
        if self.finding_count() == 0:
            return BaselineState.created_empty
        return BaselineState.populated

    def create(self, content: str) -> None:
        """Write a newly generated baseline. Refuses to overwrite.

        Missing parent directories are created.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "x", encoding="utf-8") as f:
            f.write(content)


class BaselineManager:
    """Runs the baseline-backed secret scan check.

    Parameters
    ----------
    baseline : SecretBaseline
        The artifact, passed by path.
    dispatcher : Dispatcher
        Used to run detect-secrets in ``scan`` and ``audit`` mode.
    """

    def __init__(self, baseline: SecretBaseline, dispatcher) -> None:
        self.baseline = baseline
        self.dispatcher = dispatcher

    def run(self, check: Check, fileset: FileSet) -> CheckResult:
        profile = fileset.profile
        try:
            state = self.baseline.state()
            notes = []

            if state == BaselineState.absent:
                generated = self.dispatcher.execute(check, fileset, mode="scan", baseline=self.baseline.relative_path)
                if generated.returncode != 0:
                    diagnostic = generated.output or f"detect-secrets scan exited with status {generated.returncode}"
                    return CheckResult.for_check(
                        profile, check, Outcome.failed, Classification.finding,
                        f"Could not create {self.baseline.relative_path}:\n{diagnostic}",
                    )
                try:
                    self.baseline.create(generated.stdout)
                except OSError as e:
                    return CheckResult.for_check(
                        profile, check, Outcome.failed, Classification.finding,
                        f"Could not create {self.baseline.relative_path}: {e}",
                    )
                state = self.baseline.state()
                logger.info("Created %s (%s)", self.baseline.path, state.value)
                notes.append(f"Created {self.baseline.relative_path}.")

            if state == BaselineState.created_empty:
                notes.append(f"{self.baseline.relative_path} records no findings; nothing to audit.")
                return CheckResult.for_check(
                    profile, check, Outcome.skipped, Classification.baseline_empty, " ".join(notes),
                )

            audit = self.dispatcher.execute(check, fileset, mode="audit", baseline=self.baseline.relative_path)
        except EnvironmentUnavailableError as e:
            return self.dispatcher.environment_failure(profile, check, e)

        result = self.dispatcher.classify(profile, check, audit)
        if result.outcome == Outcome.failed:
            hint = f"Review with: detect-secrets audit {self.baseline.relative_path}"
            return result.model_copy(update={"diagnostic": f"{result.diagnostic}\n{hint}"})
        return result


__all__ = ["BaselineState", "SecretBaseline", "BaselineManager"]
