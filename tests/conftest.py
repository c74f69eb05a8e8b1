"""Shared test fixtures."""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

import pytest

from lintgate.application.orchestrator import CheckOrchestrator
from lintgate.config import Config
from lintgate.core.exceptions import EnvironmentUnavailableError
from lintgate.core.logging_config import LOGGER_NAME
from lintgate.core.models import ToolRunResult


class FakeRunner:
    """Records tool invocations and replays scripted results.

    ``responses`` maps a tool name to ``(returncode, stdout, stderr)``, a list
    of such tuples consumed in order (the last one repeats), or a callable
    ``(args, workdir) -> tuple``.
    """

    def __init__(
        self,
        name: str = "docker",
        available: bool = True,
        mount: Optional[str] = "/work",
        responses: Optional[Dict] = None,
    ) -> None:
        self.name = name
        self.available = available
        self.mount = mount
        self.responses = dict(responses or {})
        self.calls: List[dict] = []

    def is_available(self, executable=None) -> bool:
        return self.available

    def ensure_available(self, executable=None) -> None:
        if not self.available:
            raise EnvironmentUnavailableError(self.name, f"{self.name} is not running")

    def path_for(self, relative: PurePosixPath) -> str:
        if self.mount is None:
            return str(relative)
        return f"{self.mount}/{relative}"

    def run(self, tool, args, *, image=None, workdir=None) -> ToolRunResult:
        self.ensure_available()
        self.calls.append({"tool": tool, "args": list(args), "image": image, "workdir": workdir})

        response = self.responses.get(tool, (0, "", ""))
        if callable(response):
            response = response(list(args), workdir)
        elif isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]
        returncode, stdout, stderr = response
        return ToolRunResult(
            tool=tool,
            cmd=list(args),
            cwd="/work",
            returncode=returncode,
            duration_s=0.01,
            stdout=stdout,
            stderr=stderr,
        )

    def tools_called(self) -> List[str]:
        return [c["tool"] for c in self.calls]


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def sandbox() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def host() -> FakeRunner:
    return FakeRunner(name="host", mount=None)


@pytest.fixture
def make_config():
    def _make(root: Path, **sections) -> Config:
        data = {"project": {"root": str(root), **sections.pop("project", {})}}
        data.update(sections)
        return Config.from_dict(data)

    return _make


@pytest.fixture
def make_orchestrator(make_config, sandbox, host):
    def _make(root: Path, fix: bool = False, **sections) -> CheckOrchestrator:
        return CheckOrchestrator(make_config(root, **sections), fix=fix, sandbox=sandbox, host=host)

    return _make


@pytest.fixture(autouse=True)
def _clear_lintgate_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("LINTGATE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def make_tree(tmp_path):
    def _make(files: Dict[str, str]) -> Path:
        return write_tree(tmp_path, files)

    return _make


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging.getLogger(LOGGER_NAME).handlers.clear()
