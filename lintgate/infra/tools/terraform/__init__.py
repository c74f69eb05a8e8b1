from __future__ import annotations

from .base import TerraformFmtTool, TerraformValidateTool, TflintTool

__all__ = ["TerraformFmtTool", "TerraformValidateTool", "TflintTool"]
