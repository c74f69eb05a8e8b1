"""Tests for CLI commands using Typer's CliRunner."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from lintgate.application.orchestrator import CheckOrchestrator
from lintgate.lintgate_cli import cli
from lintgate.lintgate_cli.cli import app

runner = CliRunner()


@pytest.fixture
def built(monkeypatch, sandbox, host):
    """Route the CLI's orchestrator through the scripted runners."""
    seen = {}

    def fake_build(config, fix=False):
        seen["fix"] = fix
        seen["config"] = config
        return CheckOrchestrator(config, fix=fix, sandbox=sandbox, host=host)

    monkeypatch.setattr(cli, "_build_orchestrator", fake_build)
    monkeypatch.setattr(cli, "HostRunner", lambda root: host)
    return seen


def test_main_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("check", "lint", "format", "security", "test", "ci", "clean", "init", "pre-commit"):
        assert command in result.output


def test_main_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_lint_prints_report(make_tree, built):
    root = make_tree({"deploy.sh": "echo\n"})

    result = runner.invoke(app, ["--root", str(root), "lint"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].split() == ["shell", "lint", "shellcheck", "PASSED"]
    assert "SKIPPED [no-files]" in lines[1]
    assert lines[-1] == "Overall: PASS"


def test_lint_failure_prints_diagnostic(make_tree, built, sandbox):
    root = make_tree({"app.py": "import os\n"})
    sandbox.responses["flake8"] = (1, "/work/app.py:1:1: F401 'os' imported but unused", "")

    result = runner.invoke(app, ["--root", str(root), "lint", "--language", "python"])

    assert result.exit_code == 1
    assert "--- python/flake8 ---" in result.output
    assert "F401" in result.output
    assert result.output.rstrip().endswith("Overall: FAIL")


def test_advisory_failure_is_marked(make_tree, built, sandbox):
    root = make_tree({"app.py": "x=1\n"})
    sandbox.responses["pylint"] = (16, "C0114", "")

    result = runner.invoke(app, ["--root", str(root), "lint", "-l", "python"])

    assert result.exit_code == 0
    assert "(advisory)" in result.output
    assert "Overall: PASS" in result.output


def test_unavailable_engine_exits_2(make_tree, built, sandbox):
    root = make_tree({"deploy.sh": "echo\n"})
    sandbox.available = False

    result = runner.invoke(app, ["--root", str(root), "check"])

    assert result.exit_code == 2
    assert "[environment]" in result.output


def test_missing_script_exits_3_without_running(make_tree, built, sandbox):
    root = make_tree({"deploy.sh": "echo\n"})

    result = runner.invoke(app, ["--root", str(root), "--script", "missing.sh", "lint"])

    assert result.exit_code == 3
    assert "missing.sh" in result.output
    assert sandbox.calls == []


def test_unknown_language_exits_3(make_tree, built):
    root = make_tree({})
    result = runner.invoke(app, ["--root", str(root), "lint", "--language", "ruby"])
    assert result.exit_code == 3


def test_language_with_nothing_to_lint_exits_3(make_tree, built, sandbox):
    root = make_tree({"deploy.sh": "echo\n"})
    result = runner.invoke(app, ["--root", str(root), "lint", "--language", "secrets"])
    assert result.exit_code == 3
    assert "Overall: PASS" not in result.output
    assert sandbox.calls == []


def test_missing_root_exits_3(tmp_path):
    result = runner.invoke(app, ["--root", str(tmp_path / "absent"), "check"])
    assert result.exit_code == 3


def test_format_fix_flag_reaches_orchestrator(make_tree, built, sandbox):
    root = make_tree({"deploy.sh": "echo\n"})

    result = runner.invoke(app, ["--root", str(root), "format", "--fix"])

    assert result.exit_code == 0
    assert built["fix"] is True
    assert "-w" in sandbox.calls[0]["args"]


def test_security_creates_baseline(make_tree, built, sandbox):
    root = make_tree({})
    sandbox.responses["detect-secrets"] = (0, json.dumps({"results": {}}), "")

    result = runner.invoke(app, ["--root", str(root), "security"])

    assert result.exit_code == 0
    assert "gitleaks" in result.output
    assert (root / ".secrets.baseline").exists()


def test_engine_option_reaches_config(make_tree, built):
    root = make_tree({})
    runner.invoke(app, ["--root", str(root), "--engine", "podman", "test"])
    assert built["config"].sandbox.engine == "podman"


def test_clean_dry_run(make_tree):
    root = make_tree({"old.bak": ""})
    result = runner.invoke(app, ["--root", str(root), "clean", "--dry-run"])
    assert result.exit_code == 0
    assert "Would remove old.bak" in result.output
    assert (root / "old.bak").exists()


def test_init_without_pre_commit_exits_2(make_tree, built, host):
    root = make_tree({})
    host.available = False
    result = runner.invoke(app, ["--root", str(root), "init"])
    assert result.exit_code == 2
    assert "pip install pre-commit" in result.output


def test_pre_commit_failure_exits_1(make_tree, built, host):
    root = make_tree({})
    host.responses["pre-commit"] = (1, "trailing-whitespace....Failed", "")
    result = runner.invoke(app, ["--root", str(root), "pre-commit"])
    assert result.exit_code == 1
    assert "trailing-whitespace" in result.output
