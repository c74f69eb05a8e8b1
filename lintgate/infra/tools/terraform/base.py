"""Terraform tools, run once per directory that holds ``.tf`` files.

Classes
-------
TflintTool : tflint, after a best-effort ``tflint --init``
TerraformValidateTool : ``terraform validate`` after ``init -backend=false``
TerraformFmtTool : ``terraform fmt`` in check or rewrite mode

Notes
-----
The preparation steps download plugins and providers into the tree
(``.terraform``); their failures are ignored so that the real check reports
the problem.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from ..base import DirectoryCheckTool


class TflintTool(DirectoryCheckTool):
    @property
    def name(self) -> str:
        return "tflint"

    def prepare_cmd(self, *, fix: bool = False) -> Optional[List[str]]:
        return ["--init"]

    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        return list(self.args)


class TerraformValidateTool(DirectoryCheckTool):
    @property
    def name(self) -> str:
        return "terraform-validate"

    @property
    def image_key(self) -> str:
        return "terraform"

    def prepare_cmd(self, *, fix: bool = False) -> Optional[List[str]]:
        return ["init", "-backend=false", "-input=false"]

    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        return ["validate", *self.args]


class TerraformFmtTool(DirectoryCheckTool):
    @property
    def name(self) -> str:
        return "terraform-fmt"

    @property
    def image_key(self) -> str:
        return "terraform"

    def build_cmd(self, paths: Sequence[str], *, fix: bool = False) -> List[str]:
        if fix:
            return ["fmt", "-recursive", *self.args]
        return ["fmt", "-check", "-diff", *self.args]


__all__ = ["TflintTool", "TerraformValidateTool", "TerraformFmtTool"]
