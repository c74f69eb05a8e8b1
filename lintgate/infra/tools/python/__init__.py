from __future__ import annotations

from .base import BlackTool, Flake8Tool, PylintTool

__all__ = ["BlackTool", "Flake8Tool", "PylintTool"]
