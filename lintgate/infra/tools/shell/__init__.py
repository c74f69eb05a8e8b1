from __future__ import annotations

from .base import BashSyntaxTool, ShellcheckTool, ShfmtTool

__all__ = ["BashSyntaxTool", "ShellcheckTool", "ShfmtTool"]
