"""Infrastructure layer for lintgate.

This package contains the execution environments and the external tool
wrappers.
"""
from __future__ import annotations

__all__ = []
