"""Python tools, installed with pip inside a ``python`` image.

Classes
-------
PylintTool : pylint (advisory in the default profile)
Flake8Tool : flake8 style and error checks
BlackTool : black in ``--check`` or rewrite mode
"""
from __future__ import annotations

from typing import List, Sequence

from ..base import PipInstalledTool


class PylintTool(PipInstalledTool):
    package = "pylint"

    @property
    def name(self) -> str:
        return "pylint"

    def tool_args(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        return [*self.args, *paths]


class Flake8Tool(PipInstalledTool):
    package = "flake8"

    @property
    def name(self) -> str:
        return "flake8"

    def tool_args(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        return [*self.args, *paths]


class BlackTool(PipInstalledTool):
    """
    black formatter.

    Examples
    --------
    >>> BlackTool(args=["--line-length=100"]).tool_args(["/work/app.py"])
    ['--check', '--line-length=100', '/work/app.py']
    """

    package = "black"

    @property
    def name(self) -> str:
        return "black"

    def tool_args(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        mode = [] if fix else ["--check"]
        return [*mode, *self.args, *paths]


__all__ = ["PylintTool", "Flake8Tool", "BlackTool"]
