"""Repository housekeeping: temporary-file cleanup and pre-commit hooks.

These commands do not produce a RunReport; they either succeed or raise.
"""
from __future__ import annotations

import os
import shutil
from fnmatch import fnmatch
from pathlib import Path
from typing import List

from lintgate.core.logging_config import get_logger
from lintgate.core.models import ToolRunResult

logger = get_logger(__name__)

CLEAN_FILE_PATTERNS = ("*.bak", "*.tmp", "*.swp", "*~", "*.pyc", ".terraform.lock.hcl")
CLEAN_DIR_NAMES = ("__pycache__", ".pytest_cache", ".terraform")
# never descend into these
PROTECTED_DIRS = (".git",)


def clean_tree(root: Path, dry_run: bool = False) -> List[Path]:
    """Delete editor backups, bytecode and tool caches under ``root``.

    Parameters
    ----------
    root : Path
        Tree to clean.
    dry_run : bool, optional
        Only report what would be removed. Default is False.

    Returns
    -------
    List[Path]
        Removed (or removable) paths, sorted.
    """
    root = Path(root).resolve()
    removed: List[Path] = []

    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        keep = []
        for d in dirnames:
            if d in PROTECTED_DIRS:
                continue
            if d in CLEAN_DIR_NAMES:
                removed.append(Path(dirpath) / d)
                continue
            keep.append(d)
        dirnames[:] = keep

        for filename in filenames:
            if any(fnmatch(filename, pat) for pat in CLEAN_FILE_PATTERNS):
                removed.append(Path(dirpath) / filename)

    removed.sort()
    if dry_run:
        return removed

    for path in removed:
        logger.debug("Removing %s", path)
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    return removed


def install_hooks(host) -> List[ToolRunResult]:
    """Install the pre-commit and commit-msg hooks.

    Stops after the first failing install.

    Raises
    ------
    EnvironmentUnavailableError
        If ``pre-commit`` is not installed.
    """
    results = []
    for extra in ([], ["--hook-type", "commit-msg"]):
        result = host.run("pre-commit", ["pre-commit", "install", *extra])
        results.append(result)
        if result.returncode != 0:
            break
    return results


def run_hooks(host) -> ToolRunResult:
    """Run every configured pre-commit hook against all files."""
    return host.run("pre-commit", ["pre-commit", "run", "--all-files"])


__all__ = ["clean_tree", "install_hooks", "run_hooks"]
