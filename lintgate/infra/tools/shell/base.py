"""Shell script tools: ShellCheck, shfmt and the host-side syntax check.

Classes
-------
ShellcheckTool : Static analysis for shell scripts
ShfmtTool : Shell formatter (diff or write mode)
BashSyntaxTool : ``bash -n`` parse check, run on the host
"""
from __future__ import annotations

from typing import List, Sequence

from lintgate.core.models import FileSet, ToolRunResult

from ..base import CheckTool


class ShellcheckTool(CheckTool):
    """ShellCheck; the image's entrypoint is ``shellcheck``."""

    @property
    def name(self) -> str:
        return "shellcheck"

    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        return [*self.args, *paths]


class ShfmtTool(CheckTool):
    """
    shfmt in check-only (``-d``, print a diff) or auto-fix (``-w``) mode.

    Examples
    --------
    >>> ShfmtTool(args=["-i", "2"]).build_cmd(["/work/deploy.sh"])
    ['-i', '2', '-d', '/work/deploy.sh']
    """

    @property
    def name(self) -> str:
        return "shfmt"

    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        return [*self.args, "-w" if fix else "-d", *paths]


class BashSyntaxTool(CheckTool):
    """Parse each script with ``bash -n`` on the host.

    ``bash -n`` only reads its first operand, so every file is checked with
    its own invocation. All files are checked; the first non-zero status is
    reported.
    """

    sandboxed = False

    @property
    def name(self) -> str:
        return "bash-syntax"

    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        return ["bash", "-n", *self.args, *paths[:1]]

    def execute(self, runner, fileset: FileSet, *, fix: bool = False) -> ToolRunResult:
        returncode = 0
        duration = 0.0
        errors = []
        cmd: List[str] = []
        for path in fileset.files:
            cmd = self.build_cmd([runner.path_for(path)])
            run = runner.run(self.name, cmd)
            duration += run.duration_s
            if run.returncode != 0:
                returncode = returncode or run.returncode
                errors.append(run.output or f"{path}: syntax check failed")
        return ToolRunResult(
            tool=self.name,
            cmd=cmd,
            cwd=str(fileset.root),
            returncode=returncode,
            duration_s=duration,
            stdout="",
            stderr="\n".join(errors),
        )


__all__ = ["ShellcheckTool", "ShfmtTool", "BashSyntaxTool"]
