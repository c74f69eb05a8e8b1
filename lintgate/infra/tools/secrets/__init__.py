from __future__ import annotations

from .base import DetectSecretsTool, GitleaksTool

__all__ = ["DetectSecretsTool", "GitleaksTool"]
