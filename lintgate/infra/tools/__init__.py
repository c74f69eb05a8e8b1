"""External tool wrapper implementations.

Each language family has its own subpackage.

Supported Tools
---------------
- shell : ShellCheck, shfmt, bash -n
- python : pylint, flake8, black
- terraform : tflint, terraform validate, terraform fmt
- secrets : Gitleaks, detect-secrets

See Also
--------
lintgate.infra.tools.base : Base tool classes
lintgate.application.dispatcher : Tool registry and dispatch
"""
from __future__ import annotations

from .base import CheckTool, DirectoryCheckTool, PipInstalledTool, run_process
from .python import BlackTool, Flake8Tool, PylintTool
from .secrets import DetectSecretsTool, GitleaksTool
from .shell import BashSyntaxTool, ShellcheckTool, ShfmtTool
from .terraform import TerraformFmtTool, TerraformValidateTool, TflintTool

__all__ = [
    "CheckTool",
    "DirectoryCheckTool",
    "PipInstalledTool",
    "run_process",
    "BlackTool",
    "Flake8Tool",
    "PylintTool",
    "DetectSecretsTool",
    "GitleaksTool",
    "BashSyntaxTool",
    "ShellcheckTool",
    "ShfmtTool",
    "TerraformFmtTool",
    "TerraformValidateTool",
    "TflintTool",
]
