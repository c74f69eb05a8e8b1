"""Command-line interface for lintgate."""
from __future__ import annotations

from .cli import app

__all__ = ["app"]
