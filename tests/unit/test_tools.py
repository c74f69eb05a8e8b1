"""Tests for tool wrappers: command construction and per-directory execution."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from lintgate.core.models import FileSet
from lintgate.infra.tools import (
    BashSyntaxTool,
    BlackTool,
    DetectSecretsTool,
    Flake8Tool,
    GitleaksTool,
    ShellcheckTool,
    ShfmtTool,
    TerraformFmtTool,
    TerraformValidateTool,
    TflintTool,
)
from lintgate.infra.tools.base import MAX_ARGS_BYTES, batch_paths


def _fileset(profile, *files):
    return FileSet(profile=profile, root=Path("/repo"), files=tuple(PurePosixPath(f) for f in files))


def test_shellcheck_passes_flags_then_files():
    tool = ShellcheckTool(args=["-e", "SC1090"])
    assert tool.build_cmd(["/work/a.sh", "/work/b.sh"]) == ["-e", "SC1090", "/work/a.sh", "/work/b.sh"]
    assert tool.sandboxed


@pytest.mark.parametrize("fix, mode", [(False, "-d"), (True, "-w")])
def test_shfmt_mode(fix, mode):
    assert ShfmtTool(args=["-i", "2"]).build_cmd(["/work/a.sh"], fix=fix) == ["-i", "2", mode, "/work/a.sh"]


def test_black_check_and_fix():
    tool = BlackTool(args=["--line-length=100"])
    assert tool.tool_args(["/work/app.py"]) == ["--check", "--line-length=100", "/work/app.py"]
    assert tool.tool_args(["/work/app.py"], fix=True) == ["--line-length=100", "/work/app.py"]


def test_pip_tools_install_before_running():
    cmd = Flake8Tool(args=["--max-line-length=100"]).build_cmd(["/work/app.py"])
    assert cmd[:2] == ["sh", "-c"]
    assert cmd[2].startswith("pip install -q --disable-pip-version-check flake8 >&2 && ")
    assert cmd[2].endswith("flake8 --max-line-length=100 /work/app.py")


def test_pip_tools_quote_paths():
    cmd = Flake8Tool().build_cmd(["/work/my app.py"])
    assert cmd[2].endswith("flake8 '/work/my app.py'")


def test_gitleaks_scans_tree():
    assert GitleaksTool().build_cmd([]) == ["detect", "--source", "."]
    assert GitleaksTool(args=["--no-banner"]).build_cmd(["/work/a.py"]) == ["detect", "--source", ".", "--no-banner"]


def test_detect_secrets_modes():
    assert DetectSecretsTool(mode="scan").tool_args([]) == ["scan"]
    assert DetectSecretsTool(mode="audit", baseline="ci/.baseline").tool_args([]) == [
        "audit", "ci/.baseline", "--report", "--json", "--fail-on-unaudited",
    ]
    with pytest.raises(ValueError):
        DetectSecretsTool(mode="update")


def test_terraform_tools_share_image_key():
    assert TerraformValidateTool().image_key == "terraform"
    assert TerraformFmtTool().image_key == "terraform"
    assert TflintTool().image_key == "tflint"


def test_terraform_fmt_modes():
    assert TerraformFmtTool().build_cmd([]) == ["fmt", "-check", "-diff"]
    assert TerraformFmtTool().build_cmd([], fix=True) == ["fmt", "-recursive"]


def test_directory_tool_runs_per_directory(make_runner):
    runner = make_runner()
    tool = TerraformValidateTool(image="hashicorp/terraform:latest")
    run = tool.execute(runner, _fileset("terraform", "envs/prod/main.tf", "envs/dev/main.tf", "envs/dev/vars.tf"))

    assert run.returncode == 0
    assert [(c["args"], c["workdir"]) for c in runner.calls] == [
        (["init", "-backend=false", "-input=false"], PurePosixPath("envs/dev")),
        (["validate"], PurePosixPath("envs/dev")),
        (["init", "-backend=false", "-input=false"], PurePosixPath("envs/prod")),
        (["validate"], PurePosixPath("envs/prod")),
    ]
    assert all(c["image"] == "hashicorp/terraform:latest" for c in runner.calls)


def test_directory_tool_ignores_prep_failure_and_stops_at_first_failure(make_runner):
    def respond(args, workdir):
        if args == ["--init"]:
            return (1, "", "plugin download failed")
        if workdir == PurePosixPath("a"):
            return (2, "a/main.tf:3: bad attribute", "")
        return (0, "", "")

    runner = make_runner(responses={"tflint": respond})
    run = TflintTool().execute(runner, _fileset("terraform", "a/main.tf", "b/main.tf"))

    assert run.returncode == 2
    assert "bad attribute" in run.stdout
    assert "tflint failed in a" in run.stdout
    assert all(c["workdir"] == PurePosixPath("a") for c in runner.calls)


def test_bash_syntax_checks_each_file_on_host(make_runner):
    host = make_runner(name="host", mount=None, responses={
        "bash-syntax": lambda args, workdir: (2, "", f"{args[-1]}: line 3: syntax error") if args[-1] == "bad.sh" else (0, "", ""),
    })
    tool = BashSyntaxTool()
    assert not tool.sandboxed

    run = tool.execute(host, _fileset("shell", "bad.sh", "good.sh"))

    assert [c["args"] for c in host.calls] == [["bash", "-n", "bad.sh"], ["bash", "-n", "good.sh"]]
    assert run.returncode == 2
    assert "bad.sh: line 3" in run.stderr


def test_batch_paths_respects_limit():
    paths = [f"/work/pkg/module_{i:04d}.py" for i in range(50)]
    batches = batch_paths(paths, limit=200)

    assert len(batches) > 1
    assert [p for batch in batches for p in batch] == paths
    assert all(sum(len(p) + 1 for p in batch) <= 200 for batch in batches)
    assert batch_paths([]) == [[]]
    assert batch_paths(["/work/" + "x" * 300], limit=200) == [["/work/" + "x" * 300]]


def test_large_file_list_is_split_across_runs(make_runner):
    files = [f"src/very/deeply/nested/package/name/module_number_{i:05d}.py" for i in range(3000)]
    runner = make_runner()

    run = Flake8Tool().execute(runner, _fileset("python", *files))

    assert run.returncode == 0
    assert len(runner.calls) > 1
    assert all(len(c["args"][2].encode()) < 2 * MAX_ARGS_BYTES for c in runner.calls)
    seen = [p for c in runner.calls for p in c["args"][2].split() if p.startswith("/work/")]
    assert seen == [f"/work/{f}" for f in files]


def test_failing_batch_fails_the_run(make_runner):
    files = [f"pkg/m{i:05d}.py" for i in range(6000)]

    def respond(args, workdir):
        if "/work/pkg/m05999.py" in args[2]:
            return (1, "/work/pkg/m05999.py:1:1: F401 'os' imported but unused", "")
        return (0, "", "")

    runner = make_runner(responses={"flake8": respond})
    run = Flake8Tool().execute(runner, _fileset("python", *files))

    assert len(runner.calls) > 1
    assert run.returncode == 1
    assert "F401" in run.output
