"""Base classes for external tool wrappers.

This module provides the abstract base classes for wrapping the external
linters, formatters and scanners. Every tool is a polymorphic implementation
of "take a file list, return exit status plus text": the orchestrator never
knows which program it is running.

The module supports:
- Building a tool's argument list from fixed flags and a file list
- Running tools installed on demand inside a generic Python image
- Running a tool once per directory (Terraform-style tools)
- Standardized result format (ToolRunResult)

Examples
--------
Implement a custom tool:

    >>> class HadolintTool(CheckTool):
    ...     @property
    ...     def name(self) -> str:
    ...         return 'hadolint'
    ...     def build_cmd(self, paths, *, fix=False):
    ...         return [*self.args, *paths]

Notes
-----
Tools do not start processes themselves. ``execute`` hands the argument list
to a runner (see ``lintgate.infra.sandbox``), which decides whether it runs in
a container or on the host.
"""
from __future__ import annotations

import os
import shlex
import subprocess
import time
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

from lintgate.core.exceptions import EnvironmentUnavailableError
from lintgate.core.logging_config import get_logger
from lintgate.core.models import FileSet, ToolRunResult

logger = get_logger(__name__)

#: Upper bound, in bytes, on the file paths passed to one tool invocation.
#: Linux caps a single argument at 128 KiB, so a file list past this size is
#: split across several runs.
MAX_ARGS_BYTES = 64 * 1024


def batch_paths(paths: Sequence[str], limit: int = MAX_ARGS_BYTES) -> List[List[str]]:
    """Split ``paths`` into batches whose joined length stays under ``limit``.

    Always returns at least one batch, so an empty file list still produces
    a single run. A path longer than ``limit`` gets a batch of its own.
    """
    batches: List[List[str]] = [[]]
    size = 0
    for path in paths:
        cost = len(path.encode("utf-8")) + 1
        if batches[-1] and size + cost > limit:
            batches.append([])
            size = 0
        batches[-1].append(path)
        size += cost
    return batches


def run_process(tool: str, cmd: Sequence[str], cwd: Optional[str] = None) -> ToolRunResult:
    """Run ``cmd`` to completion and capture its output.

    Parameters
    ----------
    tool : str
        Tool name recorded on the result.
    cmd : Sequence[str]
        Executable and arguments.
    cwd : str, optional
        Working directory. Defaults to the current directory.

    Returns
    -------
    ToolRunResult
        Exit status, captured stdout/stderr and wall-clock duration.

    Raises
    ------
    EnvironmentUnavailableError
        If the executable cannot be started at all (missing, not executable,
        or an argument list the kernel refuses).
    """
    started = time.time()
    logger.debug("Running %s: %s", tool, shlex.join(cmd))
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=cwd,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise EnvironmentUnavailableError(cmd[0], str(e)) from e

    duration = time.time() - started
    logger.debug("%s exited with %s after %.2fs", tool, proc.returncode, duration)
    return ToolRunResult(
        tool=tool,
        cmd=list(cmd),
        cwd=os.path.abspath(cwd or os.getcwd()),
        returncode=proc.returncode,
        duration_s=duration,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )


# ---------------------------------------------------------------------------
# Base tool wrappers
# ---------------------------------------------------------------------------


class CheckTool(ABC):
    """Base class for all tool wrappers.

    Parameters
    ----------
    args : Sequence[str], optional
        Fixed option flags taken from the check definition.
    image : str, optional
        Container image the tool runs in. Ignored by host tools.

    Attributes
    ----------
    sandboxed : bool
        True if the tool must run inside the container engine.
    image_key : str
        Key into the configured image table. Defaults to ``name``.
    """

    sandboxed: bool = True

    def __init__(self, args: Sequence[str] = (), image: Optional[str] = None) -> None:
        self.args = list(args)
        self.image = image

    # ----- Properties to override -------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool identifier used in check definitions and logs."""
        raise NotImplementedError

    @property
    def image_key(self) -> str:
        return self.name

    @abstractmethod
    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        """Build the argument list passed to the runner.

        Parameters
        ----------
        paths : Sequence[str]
            Files to check, already translated to the runner's view of the
            tree.
        fix : bool, optional
            Build the auto-fix variant instead of the check-only one.

        Returns
        -------
        List[str]
            Arguments; for containerised tools these follow the image name.
        """
        raise NotImplementedError

    # ----- Public API -------------------------------------------------------------

    def execute(self, runner, fileset: FileSet, *, fix: bool = False) -> ToolRunResult:
        """Run the tool against every file in ``fileset``.

        Large file lists are split into batches (see ``batch_paths``) and the
        batch results merged: the first non-zero exit status wins and the
        output of every batch is kept.
        """
        paths = [runner.path_for(f) for f in fileset.files]
        batches = batch_paths(paths)
        if len(batches) == 1:
            return runner.run(self.name, self.build_cmd(batches[0], fix=fix), image=self.image)

        logger.debug("%s: %d files split into %d batches", self.name, len(paths), len(batches))
        runs = [runner.run(self.name, self.build_cmd(batch, fix=fix), image=self.image) for batch in batches]
        return ToolRunResult(
            tool=self.name,
            cmd=runs[0].cmd,
            cwd=runs[0].cwd,
            returncode=next((r.returncode for r in runs if r.returncode != 0), 0),
            duration_s=sum(r.duration_s for r in runs),
            stdout="\n".join(r.stdout.rstrip() for r in runs if r.stdout.strip()),
            stderr="\n".join(r.stderr.rstrip() for r in runs if r.stderr.strip()),
        )


class PipInstalledTool(CheckTool):
    """
    Tool installed with pip at run time inside a plain Python image.

    pip's own output goes to stderr so that stdout carries only what the
    tool prints.
    """

    #: distribution name passed to pip
    package: str = ""

    @property
    def executable(self) -> str:
        return self.name

    @abstractmethod
    def tool_args(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        raise NotImplementedError

    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        inner = shlex.join([self.executable, *self.tool_args(paths, fix=fix)])
        install = f"pip install -q --disable-pip-version-check {shlex.quote(self.package or self.name)} >&2"
        return ["sh", "-c", f"{install} && {inner}"]


class DirectoryCheckTool(CheckTool):
    """
    Tool that runs once per directory containing matched files.

    Directories are processed in sorted order and the loop stops at the
    first directory that fails. An optional preparation command runs first
    in each directory; its exit status is ignored.
    """

    def prepare_cmd(self, *, fix: bool = False) -> Optional[List[str]]:
        return None

    def execute(self, runner, fileset: FileSet, *, fix: bool = False) -> ToolRunResult:
        directories = fileset.directories() or [PurePosixPath(".")]
        cmd = self.build_cmd([], fix=fix)
        sections: List[str] = []
        returncode = 0
        duration = 0.0

        for directory in directories:
            prep = self.prepare_cmd(fix=fix)
            if prep:
                prepared = runner.run(self.name, prep, image=self.image, workdir=directory)
                duration += prepared.duration_s
                if prepared.returncode != 0:
                    logger.debug("%s preparation failed in %s:\n%s", self.name, directory, prepared.output)

            run = runner.run(self.name, cmd, image=self.image, workdir=directory)
            duration += run.duration_s
            if run.output:
                sections.append(f"[{directory}]\n{run.output}")
            if run.returncode != 0:
                returncode = run.returncode
                sections.append(f"{self.name} failed in {directory}")
                break

        return ToolRunResult(
            tool=self.name,
            cmd=cmd,
            cwd=str(Path(fileset.root)),
            returncode=returncode,
            duration_s=duration,
            stdout="\n".join(sections),
            stderr="",
        )


__all__ = ["CheckTool", "PipInstalledTool", "DirectoryCheckTool", "MAX_ARGS_BYTES", "batch_paths", "run_process"]
