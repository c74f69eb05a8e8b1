"""Tests for file discovery and the script override."""

from __future__ import annotations

import os
from pathlib import PurePosixPath

import pytest

from lintgate.application.file import _is_excluded, discover_files, resolve_file_set, script_override
from lintgate.core.exceptions import ConfigurationError
from lintgate.core.profiles import PYTHON, SECRETS, SHELL, TERRAFORM


def _names(fileset):
    return [str(f) for f in fileset.files]


def test_discovers_nested_files_sorted(make_tree):
    root = make_tree({
        "scripts/z.sh": "echo z\n",
        "deploy.sh": "echo hi\n",
        "scripts/a.sh": "echo a\n",
        "README.md": "# readme\n",
    })
    fileset = discover_files(root, SHELL)
    assert fileset.profile == "shell"
    assert _names(fileset) == ["deploy.sh", "scripts/a.sh", "scripts/z.sh"]


def test_excluded_directories_are_pruned(make_tree):
    root = make_tree({
        "app.py": "",
        ".git/hooks/check.py": "",
        ".venv/lib/site.py": "",
        "venv/lib/other.py": "",
        "pkg/__pycache__/mod.py": "",
        "pkg/mod.py": "",
    })
    assert _names(discover_files(root, PYTHON)) == ["app.py", "pkg/mod.py"]


def test_terraform_cache_is_skipped(make_tree):
    root = make_tree({
        "infra/main.tf": "",
        "infra/.terraform/modules/vpc/main.tf": "",
    })
    assert _names(discover_files(root, TERRAFORM)) == ["infra/main.tf"]


def test_no_matches_is_empty_not_error(make_tree):
    root = make_tree({"main.go": "package main\n"})
    fileset = discover_files(root, SHELL)
    assert fileset.is_empty
    assert len(fileset) == 0


def test_exclude_glob_matches_relative_path(make_tree):
    root = make_tree({"vendor/lib.sh": "", "run.sh": ""})
    profile = SHELL.model_copy(update={"exclude": (".git", "vendor/*")})
    assert _names(discover_files(root, profile)) == ["run.sh"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinked_directories_are_not_followed(make_tree, tmp_path_factory):
    outside = tmp_path_factory.mktemp("outside")
    (outside / "linked.sh").write_text("echo\n")
    root = make_tree({"own.sh": ""})
    os.symlink(outside, root / "link", target_is_directory=True)
    assert _names(discover_files(root, SHELL)) == ["own.sh"]


def test_is_excluded_by_name_or_path():
    assert _is_excluded((".git", ".venv"), ".venv", "services/api/.venv")
    assert _is_excluded(("build/*",), "out.py", "build/out.py")
    assert not _is_excluded((".git",), "src", "src")


def test_script_override_bypasses_excludes(make_tree):
    root = make_tree({"scripts/deploy.sh": "", "other.sh": ""})
    fileset = script_override(root, "scripts/deploy.sh")
    assert fileset.profile == "shell"
    assert fileset.files == (PurePosixPath("scripts/deploy.sh"),)


def test_script_override_accepts_absolute_path_inside_root(make_tree):
    root = make_tree({"deploy.sh": ""})
    fileset = script_override(root, str(root / "deploy.sh"))
    assert _names(fileset) == ["deploy.sh"]


def test_missing_script_override_is_configuration_error(make_tree):
    root = make_tree({"deploy.sh": ""})
    with pytest.raises(ConfigurationError) as excinfo:
        script_override(root, "missing.sh")
    assert excinfo.value.config_key == "project.script"
    assert "does not exist" in excinfo.value.message


def test_script_override_outside_root_is_rejected(tmp_path):
    root = tmp_path / "repo"
    root.mkdir()
    outside = tmp_path / "elsewhere.sh"
    outside.write_text("echo\n")
    with pytest.raises(ConfigurationError, match="inside the scan root"):
        script_override(root, str(outside))


def test_resolve_file_set_routes_by_profile(make_tree):
    root = make_tree({"a.sh": "", "b.sh": "", "app.py": ""})

    assert _names(resolve_file_set(root, SHELL, script="b.sh")) == ["b.sh"]
    # the override only applies to shell
    assert _names(resolve_file_set(root, PYTHON, script="b.sh")) == ["app.py"]

    secrets = resolve_file_set(root, SECRETS)
    assert secrets.whole_tree
    assert not secrets.is_empty
    assert secrets.files == ()
