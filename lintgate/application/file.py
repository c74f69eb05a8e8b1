"""File discovery for language profiles.

This module turns a profile's include/exclude globs into a ``FileSet``.

Matching Rules
--------------
- A file belongs to a profile if its basename or its root-relative POSIX
  path matches an include glob and neither matches an exclude glob.
- Directories matching an exclude glob are pruned during the walk and never
  descended into, so tool-managed trees (``.git``, ``.terraform``,
  virtualenvs) are neither read nor stat'ed.
- Symlinked directories are not followed.
- Zero matches is an empty FileSet, not an error.

Examples
--------
Discover Python files:
    >>> fileset = discover_files(Path("."), PYTHON)
    >>> [str(f) for f in fileset.files]
    ['app.py', 'tools/gen.py']

Check if a directory would be pruned:
    >>> _is_excluded((".git", ".venv"), ".venv", "services/api/.venv")
    True

See Also
--------
lintgate.application.orchestrator : Uses discovered file sets
"""
from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

from lintgate.core.exceptions import ConfigurationError
from lintgate.core.logging_config import get_logger
from lintgate.core.models import FileSet, LanguageProfile

logger = get_logger(__name__)

SHELL_PROFILE = "shell"


def _is_excluded(patterns: Sequence[str], name: str, relative: str) -> bool:
    """Return True if ``name`` or ``relative`` matches any pattern."""
    return any(fnmatch(name, pat) or fnmatch(relative, pat) for pat in patterns)


def discover_files(root: Path, profile: LanguageProfile) -> FileSet:
    """Discover every file under ``root`` that belongs to ``profile``.

    Parameters
    ----------
    root : Path
        Directory to walk.
    profile : LanguageProfile
        Supplies the include and exclude globs.

    Returns
    -------
    FileSet
        Root-relative paths, sorted for stable output.
    """
    root = Path(root).resolve()
    found: List[PurePosixPath] = []

    # Use os.walk with in-place dir filtering so excluded trees are never entered
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        rel_dir = Path(dirpath).relative_to(root)

        dirnames[:] = [
            d for d in dirnames
            if not _is_excluded(profile.exclude, d, (rel_dir / d).as_posix())
        ]

        for filename in filenames:
            relative = (rel_dir / filename).as_posix()
            if not _is_excluded(profile.include, filename, relative):
                continue
            if _is_excluded(profile.exclude, filename, relative):
                continue
            if not (Path(dirpath) / filename).is_file():
                continue
            found.append(PurePosixPath(relative))

    logger.debug("Discovered %d %s file(s) under %s", len(found), profile.name, root)
    return FileSet(profile=profile.name, root=root, files=tuple(sorted(found)))


def script_override(root: Path, script: str) -> FileSet:
    """Build the shell FileSet from an explicit script path.

    The caller is trusted: exclude globs are not applied.

    Raises
    ------
    ConfigurationError
        If the script does not exist, or lies outside ``root`` (it could not
        be mounted into the container).
    """
    root = Path(root).resolve()
    path = Path(script)
    if not path.is_absolute():
        path = root / path
    path = path.resolve()

    if not path.is_file():
        raise ConfigurationError("project.script", f"Script override does not exist: {script}")
    try:
        relative = path.relative_to(root)
    except ValueError as e:
        raise ConfigurationError(
            "project.script",
            f"Script override must be inside the scan root {root}: {script}",
        ) from e

    return FileSet(profile=SHELL_PROFILE, root=root, files=(PurePosixPath(relative.as_posix()),))


def resolve_file_set(root: Path, profile: LanguageProfile, script: Optional[str] = None) -> FileSet:
    """Return the FileSet for ``profile``.

    Global profiles get a whole-tree set, the shell profile honours the
    script override, every other profile is discovered.
    """
    if profile.is_global:
        return FileSet(profile=profile.name, root=Path(root).resolve(), whole_tree=True)
    if profile.name == SHELL_PROFILE and script:
        return script_override(root, script)
    return discover_files(root, profile)


__all__ = ["discover_files", "script_override", "resolve_file_set"]
