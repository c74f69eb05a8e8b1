"""
Check Orchestrator

This module plans and runs one lintgate invocation: it selects the profiles
and checks for the requested phases, discovers each profile's files, runs
the checks through the dispatcher and aggregates a RunReport.

The orchestrator:
- Resolves every FileSet before the first check runs, so a configuration
  error aborts with no partial run
- Runs profiles in declared order and checks in declared order, one at a time
- Stops a profile after its first fatal finding; other profiles still run
- Hands baseline-backed checks to the Baseline Manager

Example:
    Run the lint phase for Python only::

        orchestrator = CheckOrchestrator(load_config(args={"root": "."}))
        report = orchestrator.run([Phase.lint], language="python")
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from lintgate.application.aggregator import ResultAggregator
from lintgate.application.baseline import BaselineManager, SecretBaseline
from lintgate.application.dispatcher import Dispatcher
from lintgate.application.file import resolve_file_set
from lintgate.core.exceptions import ConfigurationError
from lintgate.core.logging_config import get_logger
from lintgate.core.models import (
    Check,
    CheckResult,
    Classification,
    FileSet,
    LanguageProfile,
    Outcome,
    Phase,
    RunReport,
)
from lintgate.core.profiles import build_profiles
from lintgate.infra.sandbox import ContainerSandbox, HostRunner

logger = get_logger(__name__)

CHECK_PHASES = (Phase.lint, Phase.format, Phase.security)
CI_PHASES = (Phase.lint, Phase.syntax)
ALL_PHASES = (Phase.lint, Phase.format, Phase.security, Phase.syntax)

Plan = List[Tuple[LanguageProfile, Tuple[Check, ...]]]


class CheckOrchestrator:
    """Runs the checks of selected phases against the configured root.

    Parameters
    ----------
    config : Config
        Validated configuration.
    fix : bool, optional
        Run fixable checks in auto-fix mode. Default is False.
    sandbox, host : optional
        Runners to use instead of the ones built from ``config``.
    dispatcher : Dispatcher, optional
        Dispatcher to use instead of the one built from the runners.
    """

    def __init__(self, config, *, fix: bool = False, sandbox=None, host=None, dispatcher=None) -> None:
        self.config = config
        self.root = config.project.root_path
        self.sandbox = sandbox or ContainerSandbox(
            self.root,
            engine=config.sandbox.engine,
            mount_point=config.sandbox.mount_point,
            probe=config.sandbox.probe,
        )
        self.host = host or HostRunner(self.root)
        self.dispatcher = dispatcher or Dispatcher(
            self.sandbox, self.host, images=config.sandbox.images, fix=fix
        )
        self.baseline_manager = BaselineManager(
            SecretBaseline(self.root, config.project.baseline), self.dispatcher
        )

    def plan(self, phases: Sequence[Phase], language: Optional[str] = None) -> Plan:
        """Profiles with at least one check in ``phases``, in declared order.

        Raises
        ------
        ConfigurationError
            If ``language`` is given but nothing would run for it, either
            because the language is disabled or because it has no check in
            ``phases`` (e.g. ``secrets`` for the lint phase).
        """
        plan: Plan = []
        for profile in build_profiles(self.config, language):
            checks = profile.checks_for(phases)
            if checks:
                plan.append((profile, checks))
        if language is not None and not plan:
            phase_names = "/".join(p.value for p in phases)
            raise ConfigurationError(
                "language",
                f"Language '{language}' has no {phase_names} checks enabled",
            )
        return plan

    def run(self, phases: Sequence[Phase], language: Optional[str] = None) -> RunReport:
        """Run every planned check and return the ordered report.

        Raises
        ------
        ConfigurationError
            Before any check runs, if a profile's file set cannot be resolved
            (e.g. a missing script override) or ``language`` is unknown.
        """
        plan = self.plan(phases, language)
        filesets: Dict[str, FileSet] = {
            profile.name: resolve_file_set(self.root, profile, self.config.project.script)
            for profile, _ in plan
        }

        aggregator = ResultAggregator((p.name, c.name) for p, checks in plan for c in checks)
        for profile, checks in plan:
            fileset = filesets[profile.name]
            logger.info("Profile %s: %d file(s), %d check(s)", profile.name, len(fileset), len(checks))
            aggregator.extend(self._run_profile(profile, checks, fileset))

        report = aggregator.report()
        logger.info("Run finished: %s", report.outcome.value)
        return report

    def _run_profile(
        self, profile: LanguageProfile, checks: Sequence[Check], fileset: FileSet
    ) -> Iterator[CheckResult]:
        blocker = None
        for check in checks:
            if blocker is not None:
                yield CheckResult.for_check(
                    profile.name, check, Outcome.skipped, Classification.aborted,
                    f"Not run: {blocker} failed.",
                )
                continue

            result = self._run_check(check, fileset)
            yield result

            # an unavailable environment is not a finding; later checks report it themselves
            if result.is_blocking and result.classification == Classification.finding:
                logger.warning("%s/%s failed; skipping the rest of %s", profile.name, check.name, profile.name)
                blocker = check.name

    def _run_check(self, check: Check, fileset: FileSet) -> CheckResult:
        if check.uses_baseline:
            return self.baseline_manager.run(check, fileset)
        return self.dispatcher.run(check, fileset)


__all__ = ["CheckOrchestrator", "CHECK_PHASES", "CI_PHASES", "ALL_PHASES"]
