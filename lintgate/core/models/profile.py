"""Static check and language profile definitions.

A ``LanguageProfile`` describes one file-type family: which files belong to
it and which checks run against them, in order. Profiles and checks are
immutable once built.

Classes
-------
Phase : Which command surface a check belongs to
Severity : Whether a failing check fails the run
Check : One invocation of an external tool
LanguageProfile : File patterns plus an ordered list of checks

See Also
--------
lintgate.core.profiles : The declared profile table
"""
from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class Phase(str, Enum):
    lint = "lint"
    format = "format"
    security = "security"
    syntax = "syntax"


class Severity(str, Enum):
    fatal = "fatal"
    advisory = "advisory"


class Check(BaseModel):
    """One discrete invocation of an external tool.

    ``tool`` is the key into the tool registry and ``args`` are the fixed
    option flags passed to it; together they form the command template.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    tool: str
    phase: Phase
    severity: Severity = Severity.fatal
    args: Tuple[str, ...] = ()
    fixable: bool = False
    uses_baseline: bool = False

    @property
    def is_fatal(self) -> bool:
        return self.severity == Severity.fatal


class LanguageProfile(BaseModel):
    """File-type family and the checks that run against it.

    A global profile (``is_global``) runs regardless of which files exist;
    its checks see the whole tree rather than a list of matched files.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    checks: Tuple[Check, ...] = ()
    is_global: bool = False

    def checks_for(self, phases) -> Tuple[Check, ...]:
        """Return this profile's checks that belong to ``phases``, in order."""
        wanted = set(phases)
        return tuple(c for c in self.checks if c.phase in wanted)


__all__ = ["Phase", "Severity", "Check", "LanguageProfile"]
