"""
Tool Dispatcher

This module maps check definitions to tool wrappers and runs them in the
right execution environment.

The dispatcher:
- Builds the tool named by a check, with the check's fixed flags and the
  configured image
- Routes containerised tools to the sandbox and host tools to the host runner
- Never invokes a tool for an empty FileSet
- Turns exit statuses into classified CheckResults

Example:
    Run one check::

        dispatcher = Dispatcher(ContainerSandbox(root), HostRunner(root))
        result = dispatcher.run(check, fileset)
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from lintgate.core.exceptions import EnvironmentUnavailableError, ToolExecutionError
from lintgate.core.logging_config import get_logger
from lintgate.core.models import Check, CheckResult, Classification, FileSet, Outcome, ToolRunResult
from lintgate.infra.tools.python import BlackTool, Flake8Tool, PylintTool
from lintgate.infra.tools.secrets import DetectSecretsTool, GitleaksTool
from lintgate.infra.tools.shell import BashSyntaxTool, ShellcheckTool, ShfmtTool
from lintgate.infra.tools.terraform import TerraformFmtTool, TerraformValidateTool, TflintTool

logger = get_logger(__name__)

# Tool factory registry mapping tool ids to their implementation classes
TOOL_FACTORIES = {
    "shellcheck": ShellcheckTool,
    "shfmt": ShfmtTool,
    "bash-syntax": BashSyntaxTool,
    "pylint": PylintTool,
    "flake8": Flake8Tool,
    "black": BlackTool,
    "tflint": TflintTool,
    "terraform-validate": TerraformValidateTool,
    "terraform-fmt": TerraformFmtTool,
    "gitleaks": GitleaksTool,
    "detect-secrets": DetectSecretsTool,
}


def available_tools() -> List[str]:
    """Get list of tool ids that checks may reference.

    Examples
    --------
    >>> 'shellcheck' in available_tools()
    True
    """
    return list(TOOL_FACTORIES.keys())


def instantiate_tool(name: str, **kwargs: Any):
    """Instantiate a tool by id from the factory registry.

    Raises
    ------
    ToolExecutionError
        If the tool id is not registered.
    """
    try:
        factory = TOOL_FACTORIES[name]
    except KeyError as exc:
        raise ToolExecutionError(name, "Unknown tool") from exc
    return factory(**kwargs)


class Dispatcher:
    """Runs checks against file sets.

    Parameters
    ----------
    sandbox : ContainerSandbox
        Runner for containerised tools.
    host : HostRunner
        Runner for tools that run on the host.
    images : Mapping[str, str], optional
        Image per tool ``image_key``.
    fix : bool, optional
        Run fixable checks in auto-fix mode. Default is False.
    """

    def __init__(
        self,
        sandbox,
        host,
        images: Optional[Mapping[str, str]] = None,
        fix: bool = False,
    ) -> None:
        self.sandbox = sandbox
        self.host = host
        self.images: Dict[str, str] = dict(images or {})
        self.fix = fix

    def build_tool(self, check: Check, **options: Any):
        tool = instantiate_tool(check.tool, args=check.args, **options)
        if tool.sandboxed:
            tool.image = self.images.get(tool.image_key)
        return tool

    def runner_for(self, tool):
        return self.sandbox if tool.sandboxed else self.host

    def execute(self, check: Check, fileset: FileSet, **options: Any) -> ToolRunResult:
        """Run the check's tool and return the raw result.

        Raises
        ------
        EnvironmentUnavailableError
            If the tool's runner cannot be used.
        """
        tool = self.build_tool(check, **options)
        runner = self.runner_for(tool)
        if tool.sandboxed:
            runner.ensure_available()
        return tool.execute(runner, fileset, fix=self.fix and check.fixable)

    def run(self, check: Check, fileset: FileSet) -> CheckResult:
        """Run one check and classify its outcome."""
        if fileset.is_empty:
            return CheckResult.for_check(
                fileset.profile,
                check,
                Outcome.skipped,
                Classification.no_files,
                f"No {fileset.profile} files found.",
            )
        try:
            run = self.execute(check, fileset)
        except EnvironmentUnavailableError as e:
            return self.environment_failure(fileset.profile, check, e)
        return self.classify(fileset.profile, check, run)

    @staticmethod
    def classify(profile: str, check: Check, run: ToolRunResult) -> CheckResult:
        if run.returncode == 0:
            return CheckResult.for_check(profile, check, Outcome.passed, diagnostic=run.output)

        diagnostic = run.output or f"{run.tool} exited with status {run.returncode}"
        if check.is_fatal:
            logger.info("%s/%s failed with status %s", profile, check.name, run.returncode)
        else:
            logger.info("%s/%s reported issues (advisory)", profile, check.name)
        return CheckResult.for_check(profile, check, Outcome.failed, Classification.finding, diagnostic)

    @staticmethod
    def environment_failure(profile: str, check: Check, error: EnvironmentUnavailableError) -> CheckResult:
        logger.warning("%s/%s not run: %s", profile, check.name, error.message)
        return CheckResult.for_check(profile, check, Outcome.failed, Classification.environment, error.message)


__all__ = ["TOOL_FACTORIES", "available_tools", "instantiate_tool", "Dispatcher"]
