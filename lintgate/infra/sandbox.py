"""Execution environments for external tools.

Two runners share one interface (``is_available``, ``ensure_available``,
``path_for``, ``run``):

- ``ContainerSandbox`` runs each tool in a disposable container with the
  working tree mounted read-write at a fixed mount point.
- ``HostRunner`` runs a tool directly on the host, for the few tools that do
  not need isolation (``bash -n``, ``pre-commit``).

Examples
--------
>>> sandbox = ContainerSandbox(Path("."))
>>> sandbox.command("koalaman/shellcheck:stable", ["deploy.sh"])[:3]
['docker', 'run', '--rm']
"""
from __future__ import annotations

import shutil
import subprocess
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

from lintgate.core.exceptions import EnvironmentUnavailableError
from lintgate.core.logging_config import get_logger
from lintgate.core.models import ToolRunResult
from lintgate.infra.tools.base import run_process

logger = get_logger(__name__)

#: exit status the docker/podman CLI uses for its own failures
ENGINE_ERROR_STATUS = 125
PROBE_TIMEOUT_S = 30


class ContainerSandbox:
    """Runs tools inside throwaway containers.

    Parameters
    ----------
    root : Path
        Working tree mounted into every container.
    engine : str, optional
        Container CLI, ``docker`` or ``podman``. Default is ``docker``.
    mount_point : str, optional
        Where the tree is mounted inside the container. Default ``/work``.
    probe : bool, optional
        Ask the engine for its version before the first run so that an
        unreachable daemon is detected up front. Default is True.
    """

    def __init__(
        self,
        root: Path,
        engine: str = "docker",
        mount_point: str = "/work",
        probe: bool = True,
    ) -> None:
        self.root = Path(root).resolve()
        self.engine = engine
        self.mount_point = PurePosixPath(mount_point)
        self.probe = probe
        self._available: Optional[bool] = None
        self._reason = ""

    @property
    def name(self) -> str:
        return self.engine

    def is_available(self) -> bool:
        """Check once whether the engine can run containers; the answer is cached."""
        if self._available is None:
            self._available, self._reason = self._detect()
            if not self._available:
                logger.warning("%s unavailable: %s", self.engine, self._reason)
        return self._available

    def ensure_available(self) -> None:
        if not self.is_available():
            raise EnvironmentUnavailableError(self.engine, self._reason)

    def path_for(self, relative: PurePosixPath) -> str:
        return str(self.mount_point / relative)

    def command(
        self,
        image: str,
        args: Sequence[str],
        workdir: Optional[PurePosixPath] = None,
    ) -> List[str]:
        """Build the full engine command line for one tool invocation."""
        cwd = self.mount_point / workdir if workdir is not None else self.mount_point
        return [
            self.engine,
            "run",
            "--rm",
            "-v",
            f"{self.root}:{self.mount_point}",
            "-w",
            str(cwd),
            image,
            *args,
        ]

    def run(
        self,
        tool: str,
        args: Sequence[str],
        *,
        image: Optional[str] = None,
        workdir: Optional[PurePosixPath] = None,
    ) -> ToolRunResult:
        """Run ``args`` in ``image`` and return the captured result.

        Raises
        ------
        EnvironmentUnavailableError
            If the engine is unavailable, or the engine itself failed
            (image pull error, daemon error) rather than the tool.
        """
        if not image:
            raise EnvironmentUnavailableError(self.engine, f"no image configured for {tool}")
        self.ensure_available()

        result = run_process(tool, self.command(image, args, workdir), cwd=str(self.root))
        if result.returncode == ENGINE_ERROR_STATUS:
            raise EnvironmentUnavailableError(
                self.engine,
                result.stderr.strip() or f"{self.engine} could not start {image}",
            )
        return result

    def _detect(self):
        if shutil.which(self.engine) is None:
            return False, f"{self.engine} not found. Install {self.engine} to run checks."
        if not self.probe:
            return True, ""
        try:
            proc = subprocess.run(
                [self.engine, "version"],
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=PROBE_TIMEOUT_S,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            return False, f"{self.engine} version probe failed: {e}"
        if proc.returncode != 0:
            return False, (proc.stderr or proc.stdout).strip() or f"{self.engine} daemon is not reachable"
        return True, ""


class HostRunner:
    """Runs tools directly on the host, from ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()

    @property
    def name(self) -> str:
        return "host"

    def is_available(self, executable: Optional[str] = None) -> bool:
        return executable is None or shutil.which(executable) is not None

    def ensure_available(self, executable: Optional[str] = None) -> None:
        if not self.is_available(executable):
            raise EnvironmentUnavailableError(executable, f"{executable} not found on PATH")

    def path_for(self, relative: PurePosixPath) -> str:
        return str(relative)

    def run(
        self,
        tool: str,
        args: Sequence[str],
        *,
        image: Optional[str] = None,
        workdir: Optional[PurePosixPath] = None,
    ) -> ToolRunResult:
        self.ensure_available(args[0])
        cwd = self.root / workdir if workdir is not None else self.root
        return run_process(tool, args, cwd=str(cwd))


__all__ = ["ContainerSandbox", "HostRunner", "ENGINE_ERROR_STATUS"]
