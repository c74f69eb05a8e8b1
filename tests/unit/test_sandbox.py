"""Tests for the container sandbox and host runner."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import PurePosixPath
from types import SimpleNamespace

import pytest

from lintgate.core.exceptions import EnvironmentUnavailableError
from lintgate.core.models import ToolRunResult
from lintgate.infra import sandbox as sandbox_module
from lintgate.infra.sandbox import ENGINE_ERROR_STATUS, ContainerSandbox, HostRunner
from lintgate.infra.tools import base as tools_base
from lintgate.infra.tools.base import run_process


def _result(returncode, stderr=""):
    return ToolRunResult(tool="t", cmd=[], cwd="/", returncode=returncode, duration_s=0.0, stdout="", stderr=stderr)


@pytest.fixture
def engine_installed(monkeypatch):
    monkeypatch.setattr(sandbox_module.shutil, "which", lambda name: f"/usr/bin/{name}")


def test_command_mounts_root_at_mount_point(tmp_path):
    box = ContainerSandbox(tmp_path, engine="podman", mount_point="/src")
    assert box.command("img:1", ["--check", "/src/a.py"], PurePosixPath("infra")) == [
        "podman", "run", "--rm", "-v", f"{tmp_path.resolve()}:/src", "-w", "/src/infra", "img:1", "--check", "/src/a.py",
    ]
    assert box.command("img:1", [])[6] == "/src"
    assert box.path_for(PurePosixPath("infra/main.tf")) == "/src/infra/main.tf"


def test_missing_engine_is_unavailable(tmp_path, monkeypatch):
    monkeypatch.setattr(sandbox_module.shutil, "which", lambda name: None)
    box = ContainerSandbox(tmp_path)
    assert not box.is_available()
    with pytest.raises(EnvironmentUnavailableError) as excinfo:
        box.run("shellcheck", ["a.sh"], image="koalaman/shellcheck:stable")
    assert excinfo.value.component == "docker"
    assert "not found" in excinfo.value.message


def test_probe_runs_once(tmp_path, monkeypatch, engine_installed):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return SimpleNamespace(returncode=1, stdout="", stderr="Cannot connect to the Docker daemon")

    monkeypatch.setattr(sandbox_module.subprocess, "run", fake_run)
    box = ContainerSandbox(tmp_path)

    assert not box.is_available()
    assert not box.is_available()
    assert calls == [["docker", "version"]]
    with pytest.raises(EnvironmentUnavailableError, match="Cannot connect"):
        box.ensure_available()


def test_probe_timeout_is_unavailable(tmp_path, monkeypatch, engine_installed):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr(sandbox_module.subprocess, "run", fake_run)
    assert not ContainerSandbox(tmp_path).is_available()


def test_engine_failure_status_is_environment_error(tmp_path, monkeypatch, engine_installed):
    monkeypatch.setattr(
        sandbox_module, "run_process",
        lambda tool, cmd, cwd=None: _result(ENGINE_ERROR_STATUS, "Unable to find image 'nope:latest'"),
    )
    box = ContainerSandbox(tmp_path, probe=False)
    with pytest.raises(EnvironmentUnavailableError, match="Unable to find image"):
        box.run("shellcheck", ["a.sh"], image="nope:latest")


def test_tool_failure_status_is_returned(tmp_path, monkeypatch, engine_installed):
    seen = {}

    def fake_process(tool, cmd, cwd=None):
        seen["cmd"] = cmd
        return _result(1)

    monkeypatch.setattr(sandbox_module, "run_process", fake_process)
    box = ContainerSandbox(tmp_path, probe=False)
    result = box.run("shellcheck", ["/work/a.sh"], image="koalaman/shellcheck:stable")

    assert result.returncode == 1
    assert seen["cmd"][:3] == ["docker", "run", "--rm"]
    assert seen["cmd"][-2:] == ["koalaman/shellcheck:stable", "/work/a.sh"]


def test_missing_image_is_environment_error(tmp_path):
    with pytest.raises(EnvironmentUnavailableError, match="no image configured"):
        ContainerSandbox(tmp_path, probe=False).run("shellcheck", ["a.sh"], image=None)


def test_host_runner_requires_executable(tmp_path):
    host = HostRunner(tmp_path)
    assert host.path_for(PurePosixPath("a/b.sh")) == "a/b.sh"
    with pytest.raises(EnvironmentUnavailableError):
        host.run("missing", ["lintgate-no-such-executable", "--version"])


def test_run_process_reports_unstartable_executable(tmp_path):
    with pytest.raises(EnvironmentUnavailableError):
        run_process("ghost", ["lintgate-no-such-executable"], cwd=str(tmp_path))


@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")
def test_host_runner_runs_bash_syntax_check(tmp_path):
    (tmp_path / "ok.sh").write_text("echo hello\n")
    (tmp_path / "bad.sh").write_text("if true; then\n")
    host = HostRunner(tmp_path)

    assert host.run("bash-syntax", ["bash", "-n", "ok.sh"]).returncode == 0
    bad = host.run("bash-syntax", ["bash", "-n", "bad.sh"])
    assert bad.returncode != 0
    assert "bad.sh" in bad.stderr


def test_run_process_maps_oversized_argument_list(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise OSError(7, "Argument list too long")

    monkeypatch.setattr(tools_base.subprocess, "run", fake_run)
    with pytest.raises(EnvironmentUnavailableError, match="Argument list too long") as excinfo:
        run_process("flake8", ["docker", "run", "x" * 10])
    assert excinfo.value.component == "docker"
